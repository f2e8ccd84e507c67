"""
Content checks.

Analyze the added lines of the diff for stubbed code, imports of packages the
project does not declare, comment padding and copy-pasted blocks.
"""

import re
from dataclasses import dataclass
from itertools import combinations
from typing import AbstractSet, Optional, Sequence

from ..log import Logger, null_logger
from ..models import CheckId, CheckResult, PRFile
from . import patterns_data as pd
from .diff import added_lines, is_added_line

MIN_CLASSIFIED_LINES = 10

MIN_BLOCK_LINES = 4
BLOCK_LENGTH_RATIO = 0.7
MIN_DUPLICATE_CHARS = 50


def placeholder_check(files: Sequence[PRFile], logger: Optional[Logger] = None) -> CheckResult:
    """Detect empty bodies, context-free TODOs, bare ``pass`` and stub names."""
    logger = logger or null_logger()
    issues: list[str] = []
    issue_count = 0
    lines_changed = 0

    for file in files:
        lines = added_lines(file.patch)
        if not lines:
            continue

        lines_changed += len(lines)
        content = "\n".join(lines)

        empty_bodies = pd.EMPTY_BODY.findall(content)
        if empty_bodies:
            issue_count += len(empty_bodies)
            issues.append(f"{file.filename}: {len(empty_bodies)} empty function body/bodies")

        todos = pd.BARE_TODO.findall(content)
        if todos:
            issue_count += len(todos)
            issues.append(f"{file.filename}: {len(todos)} TODO comment(s) without context")

        passes = pd.BARE_PASS.findall(content)
        if passes:
            issue_count += len(passes)
            issues.append(f"{file.filename}: {len(passes)} bare `pass` statement(s)")

        names = pd.PLACEHOLDER_NAMES.findall(content)
        if len(names) > pd.PLACEHOLDER_NAME_MIN:
            issue_count += len(names)
            unique = list(dict.fromkeys(n.lower() for n in names))
            issues.append(
                f"{file.filename}: placeholder variable names detected ({', '.join(unique[:5])})"
            )

        stubs = pd.NOT_IMPLEMENTED.findall(content)
        if stubs:
            issue_count += len(stubs)
            issues.append(f'{file.filename}: {len(stubs)} "not implemented" stub(s)')

    if lines_changed == 0:
        return CheckResult(CheckId.PLACEHOLDER, 0, "No code changes to analyze.")

    issue_rate = issue_count / lines_changed

    logger.debug(
        "Placeholder check: %d issues in %d lines (rate: %.1f%%)",
        issue_count, lines_changed, issue_rate * 100,
    )

    if issue_count == 0:
        score = 0
        reason = "No placeholder code detected."
    elif issue_rate < 0.02:
        score = 15
        reason = f"Minor: {issue_count} placeholder issue(s) found. {'; '.join(issues[:2])}."
    elif issue_rate < 0.05:
        score = 40
        reason = f"Moderate placeholder code detected ({issue_count} issues). {'; '.join(issues[:3])}."
    elif issue_rate < 0.1:
        score = 70
        reason = (
            f"Significant placeholder code: {issue_count} issues across {len(issues)} finding(s). "
            f"{'; '.join(issues[:3])}."
        )
    else:
        score = 95
        reason = (
            f"Heavily stubbed code: {issue_count} placeholder issues in {lines_changed} lines. "
            f"{'; '.join(issues[:4])}."
        )

    return CheckResult(CheckId.PLACEHOLDER, score, reason)


def base_package(module: str) -> str:
    """``@scope/name/sub`` -> ``@scope/name``; ``pkg/sub`` -> ``pkg``."""
    parts = module.split("/")
    if module.startswith("@"):
        return "/".join(parts[:2])
    return parts[0]


@dataclass(frozen=True)
class _SuspiciousImport:
    file: str
    module: str


def hallucinated_import_check(
    files: Sequence[PRFile],
    project_deps: AbstractSet[str],
    logger: Optional[Logger] = None,
) -> CheckResult:
    """Flag imports of packages that are neither built in nor declared."""
    logger = logger or null_logger()
    suspicious: list[_SuspiciousImport] = []
    total_imports = 0

    for file in files:
        if not file.patch:
            continue

        for pattern in pd.IMPORT_PATTERNS:
            for match in pattern.finditer(file.patch):
                module = base_package(match.group(1))
                total_imports += 1

                if module not in pd.BUILTIN_MODULES and module not in project_deps:
                    suspicious.append(_SuspiciousImport(file.filename, module))

    logger.debug(
        "Hallucinated import check: %d/%d suspicious imports",
        len(suspicious), total_imports,
    )

    if total_imports == 0:
        return CheckResult(
            CheckId.HALLUCINATED_IMPORT, 0, "No imports detected in the changed files."
        )

    suspicious_rate = len(suspicious) / total_imports
    modules = list(dict.fromkeys(s.module for s in suspicious))

    if not suspicious:
        score = 0
        reason = "All imports reference known project dependencies."
    elif len(suspicious) == 1 and suspicious_rate < 0.2:
        score = 25
        reason = (
            f"One potentially hallucinated import: `{suspicious[0].module}` in "
            f"{suspicious[0].file}. This module is not listed in the project dependencies."
        )
    elif suspicious_rate < 0.3:
        score = 55
        reason = (
            f"{len(suspicious)} import(s) reference modules not in project dependencies: "
            f"{', '.join(modules[:5])}."
        )
    else:
        score = 90
        reason = (
            f"{len(suspicious)} of {total_imports} imports ({suspicious_rate * 100:.0f}%) "
            f"reference unknown modules: {', '.join(modules[:5])}. "
            "Strongly suggests hallucinated dependencies."
        )

    return CheckResult(CheckId.HALLUCINATED_IMPORT, score, reason)


def is_comment_line(line: str) -> bool:
    """Whether an added diff line (with its ``+``) reads as a comment."""
    return any(marker.search(line) for marker in pd.COMMENT_MARKERS)


def docstring_inflation_check(files: Sequence[PRFile], logger: Optional[Logger] = None) -> CheckResult:
    """Share of added non-blank lines that are comments or docstrings."""
    logger = logger or null_logger()
    comment_lines = 0
    code_lines = 0

    for file in files:
        for line in added_lines(file.patch):
            if pd.EMPTY_ADDED_LINE.match(line):
                continue
            if is_comment_line(line):
                comment_lines += 1
            else:
                code_lines += 1

    total = comment_lines + code_lines

    logger.debug(
        "Docstring inflation: %d comment lines, %d code lines", comment_lines, code_lines
    )

    if total < MIN_CLASSIFIED_LINES:
        return CheckResult(
            CheckId.DOCSTRING_INFLATION, 0, "Too few lines to assess comment ratio."
        )

    ratio = comment_lines / total
    pct = f"{ratio * 100:.0f}%"

    if ratio <= 0.3:
        score = 0
        reason = f"Healthy comment ratio: {pct} comments ({comment_lines}/{total} lines)."
    elif ratio <= 0.45:
        score = 15
        reason = (
            f"Above-average comment ratio: {pct}. Well-documented code is fine, but "
            "AI-generated code often over-documents trivial logic."
        )
    elif ratio <= 0.6:
        score = 45
        reason = (
            f"High comment ratio: {pct} of added lines are comments ({comment_lines}/{total}). "
            "Often a sign of AI-generated code padding."
        )
    elif ratio <= 0.75:
        score = 75
        reason = (
            f"Excessive commenting: {pct} of the PR is comments/docstrings. AI tools "
            "frequently generate verbose comments to pad otherwise thin contributions."
        )
    else:
        score = 95
        reason = (
            f"Extreme comment inflation: {pct} comments. This PR is mostly documentation "
            "with minimal actual code."
        )

    return CheckResult(CheckId.DOCSTRING_INFLATION, score, reason)


@dataclass(frozen=True)
class CodeBlock:
    """A run of consecutive non-blank added lines."""
    file: str
    text: str
    line_count: int


def extract_blocks(file: PRFile) -> list[CodeBlock]:
    """Added-line blocks of at least MIN_BLOCK_LINES lines; blank lines are skipped."""
    blocks: list[CodeBlock] = []
    if not file.patch:
        return blocks

    current: list[str] = []

    def flush() -> None:
        if len(current) >= MIN_BLOCK_LINES:
            blocks.append(CodeBlock(file.filename, "\n".join(current), len(current)))
        current.clear()

    for line in file.patch.split("\n"):
        if is_added_line(line):
            clean = line[1:].strip()
            if clean:
                current.append(clean)
        else:
            flush()
    flush()

    return blocks


_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_HASH_COMMENT = re.compile(r"#.*$", re.MULTILINE)
_WHITESPACE = re.compile(r"\s+")


def normalize_code(code: str) -> str:
    """Strip comments and collapse whitespace for comparison."""
    code = _LINE_COMMENT.sub("", code)
    code = _BLOCK_COMMENT.sub("", code)
    code = _HASH_COMMENT.sub("", code)
    return _WHITESPACE.sub(" ", code).strip()


def copy_paste_check(files: Sequence[PRFile], logger: Optional[Logger] = None) -> CheckResult:
    """Count identical added blocks across the whole change set."""
    logger = logger or null_logger()
    blocks = [block for file in files for block in extract_blocks(file)]
    normalized = [normalize_code(block.text) for block in blocks]

    duplicate_count = 0
    duplicated_lines = 0
    pairs: list[tuple[str, str]] = []

    for i, j in combinations(range(len(blocks)), 2):
        a, b = blocks[i], blocks[j]

        if min(a.line_count, b.line_count) < max(a.line_count, b.line_count) * BLOCK_LENGTH_RATIO:
            continue

        if normalized[i] == normalized[j] and len(normalized[i]) > MIN_DUPLICATE_CHARS:
            duplicate_count += 1
            duplicated_lines += min(a.line_count, b.line_count)
            pairs.append((a.file, b.file))

    logger.debug(
        "Copy-paste check: %d duplicate block(s), %d duplicated lines",
        duplicate_count, duplicated_lines,
    )

    if duplicate_count == 0:
        score = 0
        reason = "No internal code duplication detected."
    elif duplicate_count == 1 and duplicated_lines < 15:
        score = 20
        file_a, file_b = pairs[0]
        reason = (
            f"Minor duplication: 1 repeated block (~{duplicated_lines} lines) "
            f"between {file_a} and {file_b}."
        )
    elif duplicate_count <= 3:
        score = 50
        reason = (
            f"{duplicate_count} duplicated code blocks found (~{duplicated_lines} lines total). "
            "AI-generated PRs often contain copy-pasted code with minimal variation."
        )
    else:
        score = 85
        reason = (
            f"Significant internal duplication: {duplicate_count} repeated blocks "
            f"(~{duplicated_lines} lines). This is a strong indicator of bulk-generated code."
        )

    return CheckResult(CheckId.COPY_PASTE, score, reason)
