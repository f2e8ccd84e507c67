"""The twelve heuristic checks."""

from .behavioral import abandonment_check, new_account_check, shotgun_check, velocity_check
from .content import (
    copy_paste_check,
    docstring_inflation_check,
    hallucinated_import_check,
    placeholder_check,
)
from .patterns import (
    formatting_only_check,
    generic_description_check,
    oversized_diff_check,
    unrelated_changes_check,
)

__all__ = [
    "velocity_check",
    "abandonment_check",
    "shotgun_check",
    "new_account_check",
    "placeholder_check",
    "hallucinated_import_check",
    "docstring_inflation_check",
    "copy_paste_check",
    "generic_description_check",
    "oversized_diff_check",
    "unrelated_changes_check",
    "formatting_only_check",
]
