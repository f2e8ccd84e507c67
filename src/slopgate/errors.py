"""Exceptions raised outside the scoring core."""


class SlopGateError(Exception):
    """Base class for SlopGate errors."""


class ConfigError(SlopGateError):
    """Invalid .slopgate.yml content."""


class SnapshotError(SlopGateError):
    """Malformed PR snapshot document."""


def format_validation_error(error) -> str:
    """Flatten a pydantic ``ValidationError`` into ``field.path: message`` pairs."""
    return "; ".join(
        "{}: {}".format(".".join(str(part) for part in item["loc"]) or "document", item["msg"])
        for item in error.errors()
    )
