"""Bulk import of vote records from delimited text.

Parsing turns each line into a tagged outcome; validation resolves the batch
into candidate drafts; conflict detection compares the candidates with the
store and with each other. Nothing is written until the single batch commit.

Expected format::

    legislatorId,motionId,position
    l1,v1,for
    l2,v1,AGAINST
"""

# Standard library imports
import csv
from dataclasses import dataclass, field
from enum import Enum

# Local application imports
from votetrack.core.exceptions import (
    DuplicateVoteRecordError,
    EmptyBatchError,
    InvalidPositionError,
    MalformedRowError,
    ValidationError,
)
from votetrack.core.monitoring.logging import get_contextual_logger
from votetrack.gateway.protocol import PersistenceGateway, VoteRecordDraft
from votetrack.models.parliament.enums import Position
from votetrack.settings import settings

REQUIRED_COLUMNS = 3
MALFORMED_ROW = "malformed row"
VALID_POSITIONS = frozenset(position.value for position in Position)


class ConflictPolicy(str, Enum):
    # Any duplicate rejects the whole batch
    REJECT = "reject"
    # Commit the rows that do not collide, report the rest
    SKIP = "skip"


class ConflictSource(str, Enum):
    STORE = "store"
    BATCH = "batch"


@dataclass(frozen=True)
class ValidRow:
    line_no: int
    record: VoteRecordDraft


@dataclass(frozen=True)
class MalformedRow:
    line_no: int
    reason: str


@dataclass(frozen=True)
class InvalidPositionRow:
    line_no: int
    token: str


RowOutcome = ValidRow | MalformedRow | InvalidPositionRow


@dataclass(frozen=True)
class ImportConflict:
    """A candidate whose (legislator, motion) pair is already taken."""

    line_no: int
    legislator_id: str
    motion_id: str
    source: ConflictSource
    # Stored record id for STORE conflicts, first batch line for BATCH conflicts
    existing_vote_record_id: str | None = None
    first_line_no: int | None = None

    def as_dict(self) -> dict[str, object]:
        return {
            "line_no": self.line_no,
            "legislator_id": self.legislator_id,
            "motion_id": self.motion_id,
            "source": self.source.value,
            "existing_vote_record_id": self.existing_vote_record_id,
            "first_line_no": self.first_line_no,
        }


@dataclass
class ImportReport:
    """Outcome of one bulk import."""

    imported: int = 0
    candidates: int = 0
    malformed: list[MalformedRow] = field(default_factory=list)
    conflicts: list[ImportConflict] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return len(self.malformed) + len(self.conflicts)


def _parse_line(line: str, delimiter: str) -> list[str]:
    return [column.strip() for column in next(csv.reader([line], delimiter=delimiter))]


def parse_vote_records(content: str, delimiter: str = ",") -> list[RowOutcome]:
    """
    Classify every data line of ``content``.

    Surrounding whitespace is trimmed first, so the header is the first
    non-blank line; it is always skipped, as are blank lines. Line numbers are
    1-based from the header. Columns beyond the third are ignored.
    """
    if len(delimiter) != 1:
        raise ValidationError(message=f"Delimiter must be a single character, got {delimiter!r}")

    outcomes: list[RowOutcome] = []
    lines = content.lstrip("\ufeff").strip().splitlines()
    for line_no, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue

        columns = _parse_line(line, delimiter)
        if len(columns) < REQUIRED_COLUMNS:
            reason = f"{MALFORMED_ROW}: expected {REQUIRED_COLUMNS} columns, got {len(columns)}"
            outcomes.append(MalformedRow(line_no=line_no, reason=reason))
            continue

        legislator_id, motion_id, token = columns[:REQUIRED_COLUMNS]
        if not legislator_id or not motion_id:
            reason = f"{MALFORMED_ROW}: legislator and motion references are required"
            outcomes.append(MalformedRow(line_no=line_no, reason=reason))
            continue

        position = token.upper()
        if position not in VALID_POSITIONS:
            outcomes.append(InvalidPositionRow(line_no=line_no, token=token))
            continue

        draft = VoteRecordDraft(
            legislator_id=legislator_id, motion_id=motion_id, position=Position(position), line_no=line_no
        )
        outcomes.append(ValidRow(line_no=line_no, record=draft))
    return outcomes


def validate_rows(outcomes: list[RowOutcome], strict: bool = False) -> list[VoteRecordDraft]:
    """
    Resolve parsed rows into the candidate batch.

    Raises:
        InvalidPositionError: any row has an unknown position (fatal for the batch)
        MalformedRowError: a row is malformed and ``strict`` is set
        EmptyBatchError: no row is valid
    """
    invalid = [(row.line_no, row.token) for row in outcomes if isinstance(row, InvalidPositionRow)]
    if invalid:
        line_no, token = invalid[0]
        raise InvalidPositionError(message="invalid position", line_no=line_no, token=token, invalid_rows=invalid)

    malformed = [row for row in outcomes if isinstance(row, MalformedRow)]
    if strict and malformed:
        first = malformed[0]
        raise MalformedRowError(message=first.reason.removeprefix(f"{MALFORMED_ROW}: "), line_no=first.line_no)

    candidates = [row.record for row in outcomes if isinstance(row, ValidRow)]
    if not candidates:
        raise EmptyBatchError(message="No valid records found", malformed_count=len(malformed))
    return candidates


def find_conflicts(
    candidates: list[VoteRecordDraft], existing: dict[tuple[str, str], str]
) -> tuple[list[VoteRecordDraft], list[ImportConflict]]:
    """
    Split candidates into committable drafts and conflicts.

    ``existing`` maps stored (legislator_id, motion_id) pairs to their record id.
    Within the batch the first occurrence of a pair wins, so the committable
    list never repeats a pair and never repeats a stored one.
    """
    accepted: list[VoteRecordDraft] = []
    conflicts: list[ImportConflict] = []
    first_seen: dict[tuple[str, str], int | None] = {}

    for draft in candidates:
        if draft.key in existing:
            conflicts.append(
                ImportConflict(
                    line_no=draft.line_no or 0,
                    legislator_id=draft.legislator_id,
                    motion_id=draft.motion_id,
                    source=ConflictSource.STORE,
                    existing_vote_record_id=existing[draft.key],
                )
            )
        elif draft.key in first_seen:
            conflicts.append(
                ImportConflict(
                    line_no=draft.line_no or 0,
                    legislator_id=draft.legislator_id,
                    motion_id=draft.motion_id,
                    source=ConflictSource.BATCH,
                    first_line_no=first_seen[draft.key],
                )
            )
        else:
            first_seen[draft.key] = draft.line_no
            accepted.append(draft)
    return accepted, conflicts


async def load_existing_pairs(
    gateway: PersistenceGateway, candidates: list[VoteRecordDraft]
) -> dict[tuple[str, str], str]:
    """Stored record ids for every pair on the motions the batch touches."""
    existing: dict[tuple[str, str], str] = {}
    for motion_id in dict.fromkeys(draft.motion_id for draft in candidates):
        for record in await gateway.list_vote_records(motion_id=motion_id):
            existing[(record.legislator_id, record.motion_id)] = record.id
    return existing


async def import_vote_records(
    gateway: PersistenceGateway,
    content: str,
    delimiter: str | None = None,
    on_conflict: ConflictPolicy = ConflictPolicy.REJECT,
    strict: bool = False,
) -> ImportReport:
    """
    Validate ``content`` and store its vote records in one batch.

    With ``ConflictPolicy.REJECT`` any duplicate pair raises
    ``DuplicateVoteRecordError`` listing every conflict and nothing is stored.
    With ``ConflictPolicy.SKIP`` conflicting rows are left out and reported.
    Gateway failures propagate as ``PersistenceError``.
    """
    delimiter = delimiter or settings.IMPORT_DEFAULT_DELIMITER
    outcomes = parse_vote_records(content, delimiter)
    if len(outcomes) > settings.IMPORT_MAX_ROWS:
        raise ValidationError(
            message=f"Import has {len(outcomes):,} rows; the limit is {settings.IMPORT_MAX_ROWS:,}"
        )

    candidates = validate_rows(outcomes, strict=strict)
    log = get_contextual_logger("services.import", rows=len(outcomes), candidates=len(candidates))

    existing = await load_existing_pairs(gateway, candidates)
    accepted, conflicts = find_conflicts(candidates, existing)
    malformed = [row for row in outcomes if isinstance(row, MalformedRow)]
    report = ImportReport(candidates=len(candidates), malformed=malformed, conflicts=conflicts)

    if conflicts:
        log.warning(f"Import found {len(conflicts)} duplicate vote records (policy={on_conflict.value})")
        if on_conflict is ConflictPolicy.REJECT:
            first = conflicts[0]
            raise DuplicateVoteRecordError(
                message="Import contains duplicate vote records",
                legislator_id=first.legislator_id,
                motion_id=first.motion_id,
                vote_record_id=first.existing_vote_record_id,
                conflicts=[conflict.as_dict() for conflict in conflicts],
            )

    if accepted:
        report.imported = await gateway.create_vote_records_batch(accepted)
    log.info(f"Imported {report.imported} vote records, skipped {report.skipped}")
    return report
