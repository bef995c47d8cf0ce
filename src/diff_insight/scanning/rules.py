"""Rule tables for file classification: pure data, evaluated first-match-wins.

Adding a rule:
  1. Append a row to the relevant table below.
  2. That's it. ContentClassifier reads the tables in order.

Every table is a tuple so that rule order is part of the data.
"""

import re as _re
from typing import Optional, Union

# ── Filename rules ─────────────────────────────────────────────────
# Checked against the file's basename before any content rule.

FILENAME_TYPE_RULES: tuple[tuple[str, _re.Pattern[str]], ...] = (
    ("test", _re.compile(r"test\.|spec\.|\.test\.|\.spec\.|^test_\w*\.py$|_test\.(?:py|go)$")),
    ("configuration", _re.compile(r"config|settings|setup")),
    ("entry-point", _re.compile(r"index\.(?:js|ts|jsx|tsx)$|^__main__\.py$")),
    ("stylesheet", _re.compile(r"\.(?:css|scss|sass|less)$")),
    ("documentation", _re.compile(r"\.(?:md|markdown|txt|rst)$")),
)

# ── Content rules ──────────────────────────────────────────────────
# (category, subtype, patterns). The first subtype with any matching
# pattern produces the tag "{category}-{subtype}".

_I = _re.IGNORECASE


class FollowedBy:
    """Matches when ``tail`` occurs anywhere after the first ``lead`` match.

    Same result as ``lead.*?tail`` under DOTALL, in one linear pass: the lazy
    span would rescan the rest of the text from every ``lead`` hit.
    """

    def __init__(self, lead: str, tail: str):
        self.lead = _re.compile(lead)
        self.tail = _re.compile(tail)

    def search(self, text: str) -> Optional[_re.Match[str]]:
        first = self.lead.search(text)
        if first is None:
            return None
        return self.tail.search(text, first.end())


ContentPattern = Union[_re.Pattern[str], FollowedBy]

CONTENT_TYPE_RULES: tuple[tuple[str, str, tuple[ContentPattern, ...]], ...] = (
    (
        "component",
        "react",
        (
            _re.compile(r"import\s+React\b"),
            _re.compile(r"extends\s+(?:React\.)?Component\b"),
            FollowedBy(r"function\s+\w+\s*\([^)]*\)\s*\{", r"return\s*\("),
            FollowedBy(r"const\s+\w+\s*=\s*\([^)]*\)\s*=>", r"return\s*\("),
            _re.compile(r"export\s+default\s+function\s+\w+"),
        ),
    ),
    (
        "component",
        "vue",
        (
            _re.compile(r"<template>"),
            _re.compile(r"<script>"),
            FollowedBy(r"export\s+default\s*\{", r"data\s*\(\)"),
            _re.compile(r"Vue\.component"),
        ),
    ),
    (
        "component",
        "angular",
        (
            _re.compile(r"@Component\s*\("),
            _re.compile(r"@Injectable\s*\("),
            _re.compile(r"@NgModule\s*\("),
            _re.compile(r"import\s*\{\s*Component\s*\}\s*from\s*['\"]@angular"),
        ),
    ),
    (
        "api",
        "rest",
        (
            _re.compile(r"app\.(?:get|post|put|delete|patch)\s*\("),
            _re.compile(r"router\.(?:get|post|put|delete|patch)\s*\("),
            _re.compile(r"express\(\)"),
            _re.compile(r"@(?:Get|Post|Put|Delete|Patch)Mapping"),
            _re.compile(r"@RestController"),
        ),
    ),
    (
        "api",
        "graphql",
        (
            _re.compile(r"type\s+Query\s*\{"),
            _re.compile(r"type\s+Mutation\s*\{"),
            _re.compile(r"GraphQLSchema"),
            _re.compile(r"buildSchema\("),
            _re.compile(r"@Resolver"),
        ),
    ),
    (
        "database",
        "model",
        (
            _re.compile(r"mongoose\.Schema"),
            _re.compile(r"sequelize\.define"),
            _re.compile(r"@Entity\s*\("),
            _re.compile(r"class\s+\w+\s+extends\s+Model\b"),
            _re.compile(r"CREATE\s+TABLE", _I),
        ),
    ),
    (
        "database",
        "migration",
        (
            _re.compile(r"exports\.up\s*="),
            _re.compile(r"exports\.down\s*="),
            _re.compile(r"class\s+\w+Migration"),
            _re.compile(r"def\s+up\s*\("),
            _re.compile(r"def\s+down\s*\("),
        ),
    ),
    (
        "test",
        "unit",
        (
            _re.compile(r"\bdescribe\s*\("),
            _re.compile(r"\bit\s*\("),
            _re.compile(r"\btest\s*\("),
            _re.compile(r"\bexpect\s*\("),
            _re.compile(r"@Test\b"),
            _re.compile(r"\bassert\b"),
        ),
    ),
    (
        "test",
        "integration",
        (
            _re.compile(r"supertest"),
            _re.compile(r"request\(app\)"),
            _re.compile(r"@SpringBootTest"),
            _re.compile(r"TestBed\.configureTestingModule"),
        ),
    ),
    (
        "config",
        "build",
        (
            _re.compile(r"webpack\.config"),
            _re.compile(r"rollup\.config"),
            _re.compile(r"vite\.config"),
            _re.compile(r"tsconfig\.json"),
            _re.compile(r"babel\.config"),
        ),
    ),
    (
        "config",
        "environment",
        (
            _re.compile(r"\.env\b"),
            _re.compile(r"config\.(?:js|ts|json)$", _re.MULTILINE),
            _re.compile(r"settings\.(?:py|js|ts)$", _re.MULTILINE),
        ),
    ),
    (
        "style",
        "css",
        (
            _re.compile(r"\.(?:css|scss|sass|less)$", _re.MULTILINE),
            _re.compile(r"styled-components"),
            _re.compile(r"@emotion"),
        ),
    ),
    (
        "documentation",
        "markdown",
        (
            _re.compile(r"\.md$", _re.MULTILINE),
            _re.compile(r"README"),
            _re.compile(r"CHANGELOG"),
            _re.compile(r"CONTRIBUTING"),
        ),
    ),
    (
        "documentation",
        "jsdoc",
        (
            FollowedBy(r"/\*\*", r"@param"),
            FollowedBy(r"/\*\*", r"@returns"),
            FollowedBy(r"/\*\*", r"@description"),
        ),
    ),
)

# Fallback when neither filename nor content rules match.
EXTENSION_TYPES: dict[str, str] = {
    ".js": "javascript",
    ".jsx": "react-component",
    ".ts": "typescript",
    ".tsx": "react-component",
    ".vue": "vue-component",
    ".py": "python",
    ".java": "java",
    ".go": "go",
    ".rs": "rust",
    ".rb": "ruby",
    ".php": "php",
}

# ── Language detection ─────────────────────────────────────────────

EXTENSION_LANGUAGES: dict[str, str] = {
    "js": "javascript",
    "jsx": "javascript",
    "mjs": "javascript",
    "cjs": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "py": "python",
    "java": "java",
    "cpp": "cpp",
    "c": "c",
    "cs": "csharp",
    "go": "go",
    "rs": "rust",
    "rb": "ruby",
    "php": "php",
    "swift": "swift",
    "kt": "kotlin",
    "scala": "scala",
    "r": "r",
    "m": "objective-c",
    "lua": "lua",
    "dart": "dart",
    "html": "html",
    "css": "css",
    "scss": "scss",
    "sass": "sass",
    "less": "less",
    "json": "json",
    "xml": "xml",
    "yaml": "yaml",
    "yml": "yaml",
    "md": "markdown",
    "sql": "sql",
    "sh": "shell",
    "bash": "shell",
    "zsh": "shell",
}

FILENAME_LANGUAGES: dict[str, str] = {
    "dockerfile": "dockerfile",
    "makefile": "makefile",
}

# ── Purpose rules ──────────────────────────────────────────────────

PATH_PURPOSE_RULES: tuple[tuple[frozenset[str], str], ...] = (
    (frozenset({"api", "routes", "controllers"}), "API endpoint"),
    (frozenset({"components", "views", "pages"}), "UI component"),
    (frozenset({"models", "entities", "schemas"}), "Data model"),
    (frozenset({"services", "handlers", "usecases", "use-cases"}), "Business logic"),
    (frozenset({"utils", "helpers", "lib"}), "Utility"),
    (frozenset({"middleware", "interceptors", "filters"}), "Middleware"),
)

# Importing an HTTP client is not enough for "API communication"; it must be called.
CONTENT_PURPOSE_RULES: tuple[tuple[_re.Pattern[str], str], ...] = (
    (_re.compile(r"export\s+default\s+class.*extends.*Component"), "React component"),
    (_re.compile(r"app\.(?:get|post|put|delete)\("), "RESTful API"),
    (
        _re.compile(r"async\s+function.*\bfetch\b|\bfetch\(|\baxios(?:\.\w+)?\s*\("),
        "API communication",
    ),
    (_re.compile(r"mongoose\.Schema|sequelize\.define"), "Database model"),
)

FALLBACK_PURPOSE = "General-purpose module"

# ── Characteristics ────────────────────────────────────────────────

CHARACTERISTIC_RULES: tuple[tuple[str, _re.Pattern[str]], ...] = (
    ("asynchronous operations", _re.compile(r"async|await|Promise|then\(")),
    ("error handling", _re.compile(r"try\s*[{:]|catch\s*\(|throw\s+|\bexcept\b|\braise\s+")),
    ("state management", _re.compile(r"useState|setState|redux|vuex|mobx")),
    ("network calls", _re.compile(r"fetch\(|axios|http\.request|ajax|requests\.(?:get|post|put|delete)\(")),
    ("event handling", _re.compile(r"addEventListener|onClick|onChange|onSubmit|emit\(")),
    (
        "persistence operations",
        _re.compile(r"SELECT|INSERT|UPDATE|DELETE|find\(|save\(|create\(|update\("),
    ),
    ("authentication", _re.compile(r"auth|token|jwt|session|login|logout|password")),
    ("validation", _re.compile(r"validate|validator|schema\.validate|yup|joi")),
    ("caching", _re.compile(r"cache|redis|memcached|localStorage|sessionStorage")),
    ("logging", _re.compile(r"console\.log|logger|winston|morgan|debug|logging\.")),
)

# ── Complexity ─────────────────────────────────────────────────────
# Each occurrence of each pattern adds one decision point.

DECISION_POINT_PATTERNS: tuple[_re.Pattern[str], ...] = (
    _re.compile(r"if\s*\("),
    _re.compile(r"else\s+if\s*\("),
    _re.compile(r"for\s*\("),
    _re.compile(r"while\s*\("),
    _re.compile(r"do\s*\{"),
    _re.compile(r"switch\s*\("),
    _re.compile(r"case\s+"),
    _re.compile(r"catch\s*\("),
    _re.compile(r"\?\s*[^:]+\s*:"),
    _re.compile(r"&&"),
    _re.compile(r"\|\|"),
)

# ── Per-line structure tests (first match wins per line) ───────────

COMMENT_PREFIXES: tuple[str, ...] = ("//", "/*", "*", "#")

LINE_IMPORT_PATTERNS: tuple[_re.Pattern[str], ...] = (
    _re.compile(r"^import\s"),
    _re.compile(r"^const.*require\("),
    _re.compile(r"^from\s+\S+\s+import\s"),
)
LINE_EXPORT_PATTERN = _re.compile(r"^export\s")
LINE_FUNCTION_PATTERNS: tuple[_re.Pattern[str], ...] = (
    _re.compile(r"^(?:async\s+)?function\s"),
    _re.compile(r"^const\s+\w+\s*=\s*(?:async\s*)?\("),
    _re.compile(r"^(?:async\s+)?def\s"),
)
LINE_CLASS_PATTERN = _re.compile(r"^class\s")
LINE_INTERFACE_PATTERN = _re.compile(r"^(?:interface|type)\s")

# ── Extraction patterns (global scans) ─────────────────────────────

IMPORT_FROM_PATTERN = _re.compile(r"import\s+(?:[^'\";]*?\bfrom\s+)?['\"]([^'\"]+)['\"]")
REQUIRE_PATTERN = _re.compile(r"require\s*\(\s*['\"]([^'\"]+)['\"]\s*\)")
PYTHON_IMPORT_PATTERNS: tuple[_re.Pattern[str], ...] = (
    _re.compile(r"^\s*from\s+(\S+)\s+import\s+", _re.MULTILINE),
    _re.compile(r"^\s*import\s+([\w.]+)", _re.MULTILINE),
)

DEFAULT_EXPORT_PATTERN = _re.compile(
    r"export\s+default\s+(?:(?:async\s+)?function\s+|class\s+)?(\w+)"
)
NAMED_EXPORT_PATTERN = _re.compile(
    r"export\s+(?:async\s+)?(?:const|let|var|function|class)\s+(\w+)"
)
REEXPORT_PATTERN = _re.compile(r"export\s*\{\s*([^}]+)\s*\}\s*from")

FUNCTION_DECLARATION_PATTERN = _re.compile(r"(?:async\s+)?function\s+(\w+)\s*\(([^)]*)\)")
ARROW_FUNCTION_PATTERN = _re.compile(
    r"(?:const|let|var)\s+(\w+)\s*=\s*(?:async\s*)?\(([^)]*)\)\s*=>"
)
METHOD_PATTERN = _re.compile(r"(?:async\s+)?(\w+)\s*\(([^)]*)\)\s*\{")
PYTHON_FUNCTION_PATTERN = _re.compile(
    r"^\s*(?:async\s+)?def\s+(\w+)\s*\(([^)]*)\)", _re.MULTILINE
)

CLASS_PATTERNS: tuple[_re.Pattern[str], ...] = (
    _re.compile(
        r"class\s+(\w+)(?:\s+extends\s+([\w.]+))?(?:\s+implements\s+[\w.,\s]+?)?\s*\{"
    ),
    _re.compile(r"^\s*class\s+(\w+)\s*(?:\(\s*([\w.]+)?[^)]*\))?\s*:", _re.MULTILINE),
)

# Complexity above this earns a refactor suggestion in the description.
REFACTOR_SUGGESTION_COMPLEXITY = 10
