"""Data models for PR inputs and scoring results."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from functools import total_ordering
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, BeforeValidator, StrictStr, ValidationError

from .dependencies import MANIFEST_PARSERS
from .errors import SnapshotError, format_validation_error


class CheckId(str, Enum):
    """Identifiers of the twelve checks."""
    # Behavioral
    VELOCITY = "velocity"
    ABANDONMENT = "abandonment"
    SHOTGUN = "shotgun"
    NEW_ACCOUNT = "new_account"
    # Content
    PLACEHOLDER = "placeholder"
    HALLUCINATED_IMPORT = "hallucinated_import"
    DOCSTRING_INFLATION = "docstring_inflation"
    COPY_PASTE = "copy_paste"
    # Pattern
    GENERIC_DESCRIPTION = "generic_description"
    OVERSIZED_DIFF = "oversized_diff"
    UNRELATED_CHANGES = "unrelated_changes"
    FORMATTING_ONLY = "formatting_only"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def lookup(cls, name: str) -> Optional["CheckId"]:
        """Return the CheckId for a name, or None if it is not a known check."""
        try:
            return cls(name)
        except ValueError:
            return None


@total_ordering
class Verdict(Enum):
    """Verdict bands, ordered by severity."""
    PASS = "pass"
    WARN = "warn"
    FLAG = "flag"
    BLOCK = "block"

    @property
    def severity(self) -> int:
        return _VERDICT_ORDER.index(self)

    def __lt__(self, other: "Verdict") -> bool:
        if not isinstance(other, Verdict):
            return NotImplemented
        return self.severity < other.severity


_VERDICT_ORDER = [Verdict.PASS, Verdict.WARN, Verdict.FLAG, Verdict.BLOCK]


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a single check."""
    name: Union[CheckId, str]
    score: int  # 0-100 where 100 = almost certainly slop
    reason: str


@dataclass(frozen=True)
class WeightedCheck(CheckResult):
    """A check result with its resolved weight applied."""
    weight: int
    weighted_score: float


@dataclass(frozen=True)
class ScoringResult:
    """Aggregated result for one PR evaluation."""
    final_score: int
    verdict: Verdict
    checks: tuple[CheckResult, ...]
    weighted_checks: tuple[WeightedCheck, ...]
    summary: str

    def get_summary(self) -> dict:
        """Get a summary dictionary of the result."""
        return {
            "score": self.final_score,
            "verdict": self.verdict.value,
            "checks_run": len(self.checks),
            "checks_weighted": len(self.weighted_checks),
            "flagged": [str(c.name) for c in self.weighted_checks if c.score > 0],
        }


# --- Inputs ---

@dataclass(frozen=True)
class PRUser:
    """Author of a pull request."""
    login: str
    type: str = "User"  # "User" | "Bot" | "Organization"
    created_at: Optional[datetime] = None

    @property
    def is_bot(self) -> bool:
        return self.type == "Bot"


@dataclass(frozen=True)
class PullRequest:
    """Snapshot of the pull request under evaluation."""
    number: int
    title: str
    body: str = ""
    user: PRUser = field(default_factory=lambda: PRUser(login="unknown"))
    created_at: Optional[datetime] = None
    changed_files: int = 0
    additions: int = 0
    deletions: int = 0
    head_ref: str = ""
    head_sha: str = ""
    base_ref: str = ""


@dataclass(frozen=True)
class PRFile:
    """A file changed by the pull request."""
    filename: str
    status: str = "modified"
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    patch: Optional[str] = None


@dataclass(frozen=True)
class ContributorPR:
    """A pull request from the author's recent history."""
    number: int
    title: str
    body: Optional[str] = None
    state: str = "open"
    created_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    merged_at: Optional[datetime] = None
    repository_url: str = ""


@dataclass(frozen=True)
class AbandonmentStats:
    """Closed-PR history of the author in this repository."""
    total: int = 0
    abandoned: int = 0
    rate: float = 0.0  # percent closed without merge


@dataclass(frozen=True)
class PRSnapshot:
    """Everything the engine reads for one PR evaluation."""
    pull_request: PullRequest
    files: tuple[PRFile, ...] = ()
    recent_repo_prs: tuple[ContributorPR, ...] = ()  # same repo, trailing 24h
    public_prs: tuple[ContributorPR, ...] = ()  # all repos, trailing 7 days
    abandonment: AbandonmentStats = field(default_factory=AbandonmentStats)
    dependencies: frozenset[str] = frozenset()

    @classmethod
    def from_dict(cls, data: Any) -> "PRSnapshot":
        """
        Build a snapshot from a decoded JSON document.

        Manifest texts under ``manifests`` (keyed by file name) are parsed and
        merged with any explicit ``dependencies`` list.

        Raises:
            SnapshotError: If required fields are missing or mistyped.
        """
        try:
            document = SnapshotDocument.model_validate(data)
        except ValidationError as e:
            raise SnapshotError(f"Invalid snapshot: {format_validation_error(e)}") from e
        return document.to_snapshot()


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into an aware UTC datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# --- Snapshot documents ---
#
# Shape of the JSON snapshot as the CLI receives it. Nulls are accepted
# wherever GitHub's API emits them; text fields must be strings.

Timestamp = Annotated[Optional[datetime], BeforeValidator(parse_timestamp)]


class UserDocument(BaseModel):
    login: StrictStr = "unknown"
    type: StrictStr = "User"
    created_at: Timestamp = None


class RefDocument(BaseModel):
    ref: StrictStr = ""
    sha: StrictStr = ""


class PullRequestDocument(BaseModel):
    number: int
    title: Optional[StrictStr] = None
    body: Optional[StrictStr] = None
    user: Optional[UserDocument] = None
    created_at: Timestamp = None
    changed_files: int = 0
    additions: int = 0
    deletions: int = 0
    head: Optional[RefDocument] = None
    base: Optional[RefDocument] = None

    def to_pull_request(self) -> PullRequest:
        user = self.user or UserDocument()
        head = self.head or RefDocument()
        return PullRequest(
            number=self.number,
            title=self.title or "",
            body=self.body or "",
            user=PRUser(login=user.login, type=user.type, created_at=user.created_at),
            created_at=self.created_at,
            changed_files=self.changed_files,
            additions=self.additions,
            deletions=self.deletions,
            head_ref=head.ref,
            head_sha=head.sha,
            base_ref=(self.base or RefDocument()).ref,
        )


class FileDocument(BaseModel):
    filename: StrictStr
    status: StrictStr = "modified"
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    patch: Optional[StrictStr] = None

    def to_file(self) -> PRFile:
        return PRFile(**self.model_dump())


class ContributorPRDocument(BaseModel):
    number: int
    title: Optional[StrictStr] = None
    body: Optional[StrictStr] = None
    state: StrictStr = "open"
    created_at: Timestamp = None
    closed_at: Timestamp = None
    merged_at: Timestamp = None
    repository_url: StrictStr = ""

    def to_contributor_pr(self) -> ContributorPR:
        return ContributorPR(**self.model_dump(exclude={"title"}), title=self.title or "")


class AbandonmentDocument(BaseModel):
    total: int = 0
    abandoned: int = 0
    rate: float = 0.0


class SnapshotDocument(BaseModel):
    pull_request: PullRequestDocument
    files: Optional[list[FileDocument]] = None
    recent_repo_prs: Optional[list[ContributorPRDocument]] = None
    public_prs: Optional[list[ContributorPRDocument]] = None
    abandonment: Optional[AbandonmentDocument] = None
    dependencies: Optional[list[StrictStr]] = None
    # Manifest file name -> file text
    manifests: Optional[dict[str, StrictStr]] = None

    def to_snapshot(self) -> PRSnapshot:
        deps = set(self.dependencies or ())
        manifests = self.manifests or {}
        for filename, parser in MANIFEST_PARSERS.items():
            content = manifests.get(filename)
            if content:
                deps |= parser(content)

        return PRSnapshot(
            pull_request=self.pull_request.to_pull_request(),
            files=tuple(f.to_file() for f in self.files or ()),
            recent_repo_prs=tuple(p.to_contributor_pr() for p in self.recent_repo_prs or ()),
            public_prs=tuple(p.to_contributor_pr() for p in self.public_prs or ()),
            abandonment=AbandonmentStats(**(self.abandonment or AbandonmentDocument()).model_dump()),
            dependencies=frozenset(deps),
        )
