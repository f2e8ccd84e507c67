"""
Pattern tables used by the checks.

Kept as data so the lists can be tested and extended without touching the
check logic. Bump PATTERNS_VERSION when a table changes scoring behavior.
"""

import re

PATTERNS_VERSION = "1"


# --- Placeholder code (content) ---

# Empty braces, possibly holding an empty comment
EMPTY_BODY = re.compile(r"\{\s*\}|\{\s*//\s*\}|\{\s*/\*\s*\*/\s*\}")
BARE_TODO = re.compile(r"//\s*TODO\s*$", re.MULTILINE)
BARE_PASS = re.compile(r"^\+\s*pass\s*$", re.MULTILINE)
PLACEHOLDER_NAMES = re.compile(
    r"\b(foo|bar|baz|temp\d*|test\d+|xxx|yyy|zzz|placeholder|dummy|sample|example\d+)\b",
    re.IGNORECASE,
)
# Flagged only above this many occurrences per file
PLACEHOLDER_NAME_MIN = 2
NOT_IMPLEMENTED = re.compile(
    r"throw\s+new\s+(?:Error|NotImplementedError)\s*\(\s*['\"`](?:not\s+implemented|todo|fixme)"
    r"|raise\s+NotImplementedError\b",
    re.IGNORECASE,
)


# --- Imports (content) ---

IMPORT_PATTERNS = (
    # import ... from 'module'
    re.compile(r"^\+.*\bfrom\s+['\"]([^'\"./][^'\"]*)['\"]", re.MULTILINE),
    # require('module')
    re.compile(r"^\+.*\brequire\s*\(\s*['\"]([^'\"./][^'\"]*)['\"]\s*\)", re.MULTILINE),
    # import 'module'
    re.compile(r"^\+\s*import\s+['\"]([^'\"./][^'\"]*)['\"]", re.MULTILINE),
    # import module / from module import name
    re.compile(r"^\+\s*(?:import|from)\s+([a-zA-Z_][a-zA-Z0-9_]*)(?:\s|$|\.)", re.MULTILINE),
)

BUILTIN_MODULES = frozenset({
    # Node.js
    "fs", "path", "os", "util", "http", "https", "crypto", "stream",
    "events", "buffer", "child_process", "cluster", "dgram", "dns",
    "net", "readline", "tls", "url", "zlib", "assert", "querystring",
    "string_decoder", "timers", "tty", "v8", "vm", "worker_threads",
    "perf_hooks", "async_hooks", "node:fs", "node:path", "node:os",
    "node:util", "node:http", "node:https", "node:crypto", "node:stream",
    "node:events", "node:buffer", "node:child_process", "node:url",
    "node:test", "node:assert",
    # Python standard library
    "sys", "json", "math", "time", "datetime", "re", "typing",
    "collections", "itertools", "functools", "pathlib", "io", "abc",
    "logging", "unittest", "argparse", "hashlib", "base64", "copy",
    "dataclasses", "enum", "contextlib", "threading", "subprocess",
    "tempfile", "shutil", "glob", "random", "string", "textwrap",
})


# --- Comment classification (content) ---

SINGLE_LINE_COMMENT = re.compile(r"^\+\s*(//|#|--|;)\s")
BLOCK_COMMENT_START = re.compile(r"^\+\s*(/\*|\*|\"\"\"|'''|<!--)")
BLOCK_COMMENT_END = re.compile(r"(\*/|\"\"\"|'''|-->)\s*$")
DOC_COMMENT_LINE = re.compile(r"^\+\s*\*\s")
EMPTY_ADDED_LINE = re.compile(r"^\+\s*$")

COMMENT_MARKERS = (SINGLE_LINE_COMMENT, BLOCK_COMMENT_START, BLOCK_COMMENT_END, DOC_COMMENT_LINE)


# --- Titles and descriptions (pattern) ---

GENERIC_TITLES = tuple(re.compile(p) for p in (
    r"^fix(?:ed|es|ing)?\s+(?:a\s+)?bugs?$",
    r"^update(?:d|s)?\s+code$",
    r"^improve(?:d|s)?\s+(?:the\s+)?performance$",
    r"^(?:minor\s+)?fix(?:es)?$",
    r"^update(?:d|s)?$",
    r"^improve(?:ment)?s?$",
    r"^refactor(?:ed|ing)?$",
    r"^clean\s*up$",
    r"^enhance(?:ment)?s?$",
    r"^optimization$",
    r"^bug\s*fix$",
    r"^patch$",
    r"^changes$",
    r"^updates?(?:\s+(?:to\s+)?(?:the\s+)?code)?$",
    r"^fix(?:ed)?\s+(?:some\s+)?(?:issues?|problems?|errors?)$",
    r"^code\s+(?:improvement|cleanup|refactor(?:ing)?)$",
    r"^improve(?:d)?\s+code\s+quality$",
    r"^general\s+(?:improvements?|fixes|updates?)$",
    r"^misc(?:ellaneous)?\s+(?:fixes|changes|updates?)$",
    r"^small\s+(?:fixes?|changes?|updates?)$",
    r"^various\s+(?:fixes?|improvements?|updates?)$",
))

TEMPLATED_DESCRIPTIONS = tuple(re.compile(p) for p in (
    r"this (?:pr|pull request|commit) (?:fixes|improves|updates|enhances|refactors)",
    r"(?:improved|enhanced|optimized) (?:the )?(?:overall|code) (?:quality|performance|readability)",
    r"made (?:the )?(?:following|these|some) (?:changes|improvements|updates)",
    r"this (?:change|update|improvement) (?:will|should|aims to)",
))

SUBSTANTIVE_CLAIM = re.compile(
    r"fix|feat|add|implement|resolve|bug|issue|feature|enhance|refactor|optimize"
)


# --- File layout (pattern) ---

TEST_MARKERS = ("test", "spec")
CONFIG_MARKERS = ("config", "package.json", ".yml", ".yaml", ".toml")
DOC_MARKERS = ("README", "doc", ".md")

DIFF_HEADER_PREFIXES = ("@@", "diff", "index", "---", "+++")
