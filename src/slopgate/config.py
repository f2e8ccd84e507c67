"""
Configuration for SlopGate.

Loaded from a ``.slopgate.yml`` document. Every field is optional; missing
fields take the defaults below.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Annotated, Any, Mapping, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
    model_validator,
)

from .errors import ConfigError, format_validation_error
from .log import Logger, null_logger
from .models import CheckId

CONFIG_FILENAME = ".slopgate.yml"

# Weight of a check whose name has no entry in the weight table
UNKNOWN_CHECK_WEIGHT = 50

DEFAULT_WEIGHTS: Mapping[CheckId, int] = MappingProxyType({
    CheckId.VELOCITY: 80,
    CheckId.ABANDONMENT: 60,
    CheckId.SHOTGUN: 90,
    CheckId.NEW_ACCOUNT: 20,
    CheckId.PLACEHOLDER: 70,
    CheckId.HALLUCINATED_IMPORT: 90,
    CheckId.DOCSTRING_INFLATION: 40,
    CheckId.COPY_PASTE: 60,
    CheckId.GENERIC_DESCRIPTION: 50,
    CheckId.OVERSIZED_DIFF: 60,
    CheckId.UNRELATED_CHANGES: 40,
    CheckId.FORMATTING_ONLY: 30,
})

DEFAULT_BOTS = ("dependabot[bot]", "renovate[bot]", "github-actions[bot]")

# A number in [0, 100]. Booleans and numeric strings are rejected.
Score = Union[
    Annotated[StrictInt, Field(ge=0, le=100)],
    Annotated[StrictFloat, Field(ge=0, le=100)],
]


class Thresholds(BaseModel):
    """Score cut points for the warn/flag/block verdicts."""
    model_config = ConfigDict(frozen=True)

    warn: Score = 30
    flag: Score = 60
    block: Score = 80

    @model_validator(mode="after")
    def _check_order(self) -> "Thresholds":
        if not self.warn <= self.flag <= self.block:
            raise ValueError(
                f"thresholds must satisfy warn <= flag <= block, got {self.warn}/{self.flag}/{self.block}"
            )
        return self


class Weights(BaseModel):
    """Per-check weights in [0, 100]; 0 disables a check. Unknown names are ignored."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    velocity: Score = DEFAULT_WEIGHTS[CheckId.VELOCITY]
    abandonment: Score = DEFAULT_WEIGHTS[CheckId.ABANDONMENT]
    shotgun: Score = DEFAULT_WEIGHTS[CheckId.SHOTGUN]
    new_account: Score = DEFAULT_WEIGHTS[CheckId.NEW_ACCOUNT]
    placeholder: Score = DEFAULT_WEIGHTS[CheckId.PLACEHOLDER]
    hallucinated_import: Score = DEFAULT_WEIGHTS[CheckId.HALLUCINATED_IMPORT]
    docstring_inflation: Score = DEFAULT_WEIGHTS[CheckId.DOCSTRING_INFLATION]
    copy_paste: Score = DEFAULT_WEIGHTS[CheckId.COPY_PASTE]
    generic_description: Score = DEFAULT_WEIGHTS[CheckId.GENERIC_DESCRIPTION]
    oversized_diff: Score = DEFAULT_WEIGHTS[CheckId.OVERSIZED_DIFF]
    unrelated_changes: Score = DEFAULT_WEIGHTS[CheckId.UNRELATED_CHANGES]
    formatting_only: Score = DEFAULT_WEIGHTS[CheckId.FORMATTING_ONLY]

    def for_check(self, name: Union[CheckId, str]) -> float:
        """Weight for a check name; unknown names get UNKNOWN_CHECK_WEIGHT."""
        check_id = CheckId.lookup(str(name))
        if check_id is None:
            return UNKNOWN_CHECK_WEIGHT
        return getattr(self, check_id.value)

    @classmethod
    def from_mapping(cls, overrides: Mapping[str, float]) -> "Weights":
        """Defaults with the given entries replaced."""
        return cls.model_validate({str(name): weight for name, weight in overrides.items()})

    def disabled(self) -> list[CheckId]:
        return [check_id for check_id in CheckId if self.for_check(check_id) == 0]


class Allowlist(BaseModel):
    """Accounts that skip evaluation entirely."""
    model_config = ConfigDict(frozen=True)

    users: tuple[StrictStr, ...] = ()
    bots: tuple[StrictStr, ...] = DEFAULT_BOTS

    @field_validator("users", "bots", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        return () if value is None else value


class SlopGateConfig(BaseModel):
    """Top-level configuration."""
    model_config = ConfigDict(frozen=True)

    thresholds: Thresholds = Field(default_factory=Thresholds)
    auto_close: StrictBool = False
    weights: Weights = Field(default_factory=Weights)
    allowlist: Allowlist = Field(default_factory=Allowlist)

    @field_validator("thresholds", "weights", "allowlist", mode="before")
    @classmethod
    def _null_section_is_default(cls, value: Any) -> Any:
        return {} if value is None else value


DEFAULT_CONFIG = SlopGateConfig()


def is_allowlisted(config: SlopGateConfig, username: str, is_bot: bool = False) -> bool:
    """Whether a user (or bot) skips all checks."""
    if is_bot and username in config.allowlist.bots:
        return True
    return username in config.allowlist.users


def parse_config(yaml_content: str) -> SlopGateConfig:
    """
    Parse a YAML document into a validated config.

    Raises:
        ConfigError: If the YAML is invalid or a value is out of range.
    """
    try:
        raw = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}") from e

    if raw is None:
        return DEFAULT_CONFIG

    try:
        return SlopGateConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {format_validation_error(e)}") from e


def load_config(yaml_content: Optional[str], logger: Optional[Logger] = None) -> SlopGateConfig:
    """Parse config text, falling back to defaults when it is empty or invalid."""
    logger = logger or null_logger()
    if not yaml_content or not yaml_content.strip():
        return DEFAULT_CONFIG
    try:
        return parse_config(yaml_content)
    except ConfigError as e:
        logger.warning("Ignoring invalid configuration, using defaults: %s", e)
        return DEFAULT_CONFIG


def load_config_file(path: Union[str, Path], logger: Optional[Logger] = None) -> SlopGateConfig:
    """Load config from a file; a missing file means defaults."""
    path = Path(path)
    if not path.is_file():
        return DEFAULT_CONFIG
    return load_config(path.read_text(encoding="utf-8"), logger)
