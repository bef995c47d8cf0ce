"""Language profiles: the pattern tables the static analyzer keys on.

Adding a new language:
  1. Add a LanguageProfile entry to LANGUAGES below.
  2. That's it. StaticAnalyzer picks it up by name.

Languages without a profile fall back to GENERIC_LANGUAGE (the javascript
table).
"""

import re as _re
from dataclasses import dataclass

from ..exceptions import UnrecognizedLanguageError
from ..logging_config import get_logger

logger = get_logger(__name__)

Patterns = tuple[_re.Pattern[str], ...]


@dataclass(frozen=True)
class LanguageProfile:
    """Everything the static analyzer needs to know about a language.

    Structure patterns yield a name from the first non-empty capture group.
    """

    name: str

    function_patterns: Patterns = ()
    class_patterns: Patterns = ()
    interface_patterns: Patterns = ()
    type_patterns: Patterns = ()
    import_patterns: Patterns = ()
    export_patterns: Patterns = ()

    # Bug-risk patterns (empty = rule not applicable)
    loose_null_patterns: Patterns = ()
    debug_print_patterns: Patterns = ()

    # Legacy declaration keyword, reported as a style issue
    legacy_declaration_patterns: Patterns = ()

    # Loop and iteration heuristics
    performance_rules: bool = False


def _c(*patterns: str, flags: int = 0) -> Patterns:
    return tuple(_re.compile(p, flags) for p in patterns)


# ── Re-usable building blocks ──────────────────────────────────────

_JS_FUNCTIONS = _c(
    r"function\s+(\w+)"
    r"|const\s+(\w+)\s*=\s*(?:async\s*)?\(.*?\)\s*=>"
    r"|(\w+)\s*:\s*(?:async\s*)?\(.*?\)\s*=>"
)
_JS_IMPORTS = _c(r"import\s+.*?from\s+['\"](.+?)['\"]")
_CONSOLE = _c(r"console\.(?:log|error|warn|info)")
_JS_LOOSE_NULL = _c(r"(?<![=!])[=!]=\s*null\b")
_VAR_DECLARATION = _c(r"\bvar\s+\w+\s*=")

# ── Language definitions ───────────────────────────────────────────

LANGUAGES: dict[str, LanguageProfile] = {
    "javascript": LanguageProfile(
        name="javascript",
        function_patterns=_JS_FUNCTIONS,
        class_patterns=_c(r"class\s+(\w+)"),
        import_patterns=_JS_IMPORTS,
        export_patterns=_c(r"export\s+(?:default\s+)?(?:class|function|const|let|var)\s+(\w+)"),
        loose_null_patterns=_JS_LOOSE_NULL,
        debug_print_patterns=_CONSOLE,
        legacy_declaration_patterns=_VAR_DECLARATION,
        performance_rules=True,
    ),
    "typescript": LanguageProfile(
        name="typescript",
        function_patterns=_JS_FUNCTIONS,
        class_patterns=_c(r"class\s+(\w+)"),
        interface_patterns=_c(r"interface\s+(\w+)"),
        type_patterns=_c(r"\btype\s+(\w+)"),
        import_patterns=_JS_IMPORTS,
        export_patterns=_c(
            r"export\s+(?:default\s+)?(?:class|function|const|let|var|interface|type)\s+(\w+)"
        ),
        loose_null_patterns=_JS_LOOSE_NULL,
        debug_print_patterns=_CONSOLE,
        legacy_declaration_patterns=_VAR_DECLARATION,
        performance_rules=True,
    ),
    "python": LanguageProfile(
        name="python",
        function_patterns=_c(r"def\s+(\w+)\s*\("),
        class_patterns=_c(r"^\s*class\s+(\w+)", flags=_re.MULTILINE),
        import_patterns=_c(
            r"^\s*import\s+([\w.]+)|^\s*from\s+([\w.]+)\s+import", flags=_re.MULTILINE
        ),
        loose_null_patterns=_c(r"[=!]=\s*None\b"),
        debug_print_patterns=_c(r"^\s*print\s*\(", flags=_re.MULTILINE),
    ),
    "java": LanguageProfile(
        name="java",
        function_patterns=_c(
            r"(?:public|private|protected|static|\s)+[\w<>\[\]]+\s+(\w+)\s*\([^)]*\)\s*"
            r"(?:throws\s+\w+(?:\s*,\s*\w+)*)?\s*\{"
        ),
        class_patterns=_c(r"class\s+(\w+)"),
        interface_patterns=_c(r"interface\s+(\w+)"),
        import_patterns=_c(r"import\s+([\w.]+);"),
        debug_print_patterns=_c(r"System\.(?:out|err)\.print"),
    ),
    "go": LanguageProfile(
        name="go",
        function_patterns=_c(r"\bfunc\s+(?:\([^)]*\)\s*)?(\w+)\s*\("),
        class_patterns=_c(r"\btype\s+(\w+)\s+struct\s*\{"),
        interface_patterns=_c(r"\btype\s+(\w+)\s+interface\s*\{"),
        import_patterns=_c(
            r'import\s+(?:\w+\s+)?"([^"]+)"',
            r'^\s+(?:\w+\s+)?"([^"]+)"$',
            flags=_re.MULTILINE,
        ),
        export_patterns=_c(r"^func\s+(?:\([^)]*\)\s*)?([A-Z]\w*)\s*\(", flags=_re.MULTILINE),
        debug_print_patterns=_c(r"fmt\.Print"),
    ),
}

GENERIC_LANGUAGE = "javascript"


def get_language_profile(language: str, strict: bool = False) -> LanguageProfile:
    """Look up the profile for a language tag.

    Args:
        language: Language tag (e.g. "python")
        strict: Raise instead of falling back to the generic table

    Raises:
        UnrecognizedLanguageError: If strict and the language has no profile
    """
    profile = LANGUAGES.get(language)
    if profile is not None:
        return profile
    if strict:
        raise UnrecognizedLanguageError(language, sorted(LANGUAGES))
    logger.debug("No pattern table for %r, using %s table", language, GENERIC_LANGUAGE)
    return LANGUAGES[GENERIC_LANGUAGE]
