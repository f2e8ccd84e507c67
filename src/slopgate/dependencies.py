"""
Dependency manifest parsing.

Extracts the declared package names from package.json, requirements.txt and
Cargo.toml text. Malformed input yields an empty set.
"""

import json
import re
from typing import Callable, Optional

from .log import Logger, null_logger

# Package name ends at the first version operator, extras bracket or space
_REQUIREMENT_NAME_END = re.compile(r"[>=<!~\s\[]")

_CARGO_DEP_SECTION = re.compile(r"^\[(?:dev-)?dependencies(?:\.[^\]]+)?\]")
_CARGO_DEP_LINE = re.compile(r"^([a-zA-Z_][a-zA-Z0-9_-]*)\s*=")

_PACKAGE_JSON_GROUPS = ("dependencies", "devDependencies", "peerDependencies")


def parse_package_json(content: str) -> set[str]:
    """Dependency names from a package.json document."""
    deps: set[str] = set()
    try:
        pkg = json.loads(content)
    except (ValueError, TypeError):
        return deps

    if not isinstance(pkg, dict):
        return deps

    for group in _PACKAGE_JSON_GROUPS:
        declared = pkg.get(group)
        if isinstance(declared, dict):
            deps.update(declared.keys())

    return deps


def parse_requirements(content: str) -> set[str]:
    """Lowercased package names from a requirements.txt document."""
    deps: set[str] = set()
    for line in content.split("\n"):
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or stripped.startswith("-"):
            continue

        name = _REQUIREMENT_NAME_END.split(stripped, maxsplit=1)[0].lower()
        if name:
            deps.add(name)

    return deps


def parse_cargo_toml(content: str) -> set[str]:
    """Crate names from the dependency tables of a Cargo.toml document."""
    deps: set[str] = set()
    in_dep_section = False

    for line in content.split("\n"):
        stripped = line.strip()

        if stripped.startswith("["):
            in_dep_section = bool(_CARGO_DEP_SECTION.match(stripped))
            continue

        if in_dep_section:
            match = _CARGO_DEP_LINE.match(stripped)
            if match:
                deps.add(match.group(1))

    return deps


# Manifest file name -> parser, in lookup order
MANIFEST_PARSERS: dict[str, Callable[[str], set[str]]] = {
    "package.json": parse_package_json,
    "requirements.txt": parse_requirements,
    "Cargo.toml": parse_cargo_toml,
}


def load_project_deps(
    read_file: Callable[[str], Optional[str]],
    logger: Optional[Logger] = None,
) -> set[str]:
    """
    Collect dependency names from every manifest the project has.

    Args:
        read_file: Returns a manifest's text, or None when the file is absent.
        logger: Optional logger for diagnostics.

    Returns:
        Union of the names declared across all present manifests.
    """
    logger = logger or null_logger()
    deps: set[str] = set()

    for filename, parser in MANIFEST_PARSERS.items():
        content = read_file(filename)
        if not content:
            continue
        found = parser(content)
        logger.debug("%s: %d dependencies", filename, len(found))
        deps |= found

    logger.debug("Loaded %d project dependencies.", len(deps))
    return deps
