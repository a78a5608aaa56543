"""Exception hierarchy for vote record management.

Every failure raised by the services derives from ``VoteTrackError`` so the
API layer can map the whole family onto HTTP responses in one place.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class VoteTrackError(Exception):
    """Base exception for vote record errors."""

    message: str

    def __str__(self) -> str:
        return self.message

    def details(self) -> dict[str, Any] | None:
        """Structured context safe to show to API clients."""
        return None


@dataclass
class ValidationError(VoteTrackError):
    """Raised when input has the wrong shape (missing field, unknown enum token, ...)."""


@dataclass
class MalformedRowError(ValidationError):
    """Raised in strict imports when a row lacks required columns."""

    line_no: int

    def __str__(self) -> str:
        return f"Malformed row at line {self.line_no}: {self.message}"

    def details(self) -> dict[str, Any]:
        return {"line_no": self.line_no}


@dataclass
class InvalidPositionError(ValidationError):
    """Raised when an import row carries a position outside the closed enumeration.

    Fatal for the whole batch: nothing is committed.
    """

    line_no: int
    token: str
    invalid_rows: list[tuple[int, str]] = field(default_factory=list)

    def __str__(self) -> str:
        return (
            f"Invalid position at line {self.line_no}: {self.token!r}. "
            "Must be one of: FOR, AGAINST, ABSTAIN, ABSENT"
        )

    def details(self) -> dict[str, Any]:
        rows = self.invalid_rows or [(self.line_no, self.token)]
        return {"invalid_rows": [{"line_no": line_no, "token": token} for line_no, token in rows]}


@dataclass
class EmptyBatchError(ValidationError):
    """Raised when an import contains no valid records."""

    malformed_count: int = 0

    def __str__(self) -> str:
        msg = self.message
        if self.malformed_count:
            msg += f" ({self.malformed_count:,} malformed rows skipped)"
        return msg


@dataclass
class NotFoundError(VoteTrackError):
    """Raised when a referenced entity does not exist."""

    entity: str
    entity_id: str

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.entity_id}"

    def details(self) -> dict[str, Any]:
        return {"entity": self.entity, "id": self.entity_id}


@dataclass
class DuplicateVoteRecordError(VoteTrackError):
    """Raised when a (legislator, motion) pair already has a vote record.

    ``vote_record_id`` names the stored record to edit instead, when known.
    Batch imports attach every conflicting row in ``conflicts``.
    """

    legislator_id: str
    motion_id: str
    vote_record_id: str | None = None
    conflicts: list[dict[str, Any]] = field(default_factory=list)

    def __str__(self) -> str:
        msg = f"A vote record for legislator {self.legislator_id} on motion {self.motion_id} already exists"
        if len(self.conflicts) > 1:
            msg += f" ({len(self.conflicts):,} conflicting rows in total)"
        return msg

    def details(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "legislator_id": self.legislator_id,
            "motion_id": self.motion_id,
            "vote_record_id": self.vote_record_id,
        }
        if self.conflicts:
            data["conflicts"] = self.conflicts
        return data


@dataclass
class DuplicateEntityError(VoteTrackError):
    """Raised when a legislator or motion is created with an id that is already taken."""

    entity: str
    entity_id: str

    def __str__(self) -> str:
        return f"{self.entity} {self.entity_id} already exists"

    def details(self) -> dict[str, Any]:
        return {"entity": self.entity, "id": self.entity_id}


@dataclass
class ReferentialError(VoteTrackError):
    """Raised when a delete is blocked by dependent records."""

    entity: str
    entity_id: str
    dependents: int = 0

    def __str__(self) -> str:
        if self.dependents:
            return f"{self.entity} {self.entity_id} still has {self.dependents:,} vote records"
        return f"{self.entity} {self.entity_id} is still referenced by vote records"

    def details(self) -> dict[str, Any]:
        return {"entity": self.entity, "id": self.entity_id, "dependents": self.dependents}


@dataclass
class PersistenceError(VoteTrackError):
    """Raised for storage-level failures.

    ``message`` is safe for users; ``detail`` keeps the driver error for logs.
    """

    detail: str = ""

    def __str__(self) -> str:
        return self.message
