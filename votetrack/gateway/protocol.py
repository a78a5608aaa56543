# Standard library imports
from collections.abc import Sequence
from dataclasses import dataclass
import datetime
from typing import Any, Protocol

# Local application imports
from votetrack.models.parliament.enums import Position
from votetrack.models.parliament.legislator import Legislator
from votetrack.models.parliament.motion import Motion
from votetrack.models.parliament.vote_record import VoteRecord
from votetrack.schemas.parliament.query_schemas import LegislatorQuery, MotionQuery


@dataclass(frozen=True)
class VoteRecordDraft:
    """A vote record that has been validated but not stored yet.

    ``line_no`` is the 1-based source line for imported rows, None for form input.
    """

    legislator_id: str
    motion_id: str
    position: Position
    line_no: int | None = None

    @property
    def key(self) -> tuple[str, str]:
        return self.legislator_id, self.motion_id


class PersistenceGateway(Protocol):
    """
    Async access to the legislators, motions and vote_records collections.

    Implementations enforce (legislator_id, motion_id) uniqueness themselves and
    report violations as ``DuplicateVoteRecordError``. Creating a legislator or
    motion under an id already taken raises ``DuplicateEntityError``; every other
    storage failure surfaces as ``PersistenceError``.
    """

    # Legislators
    async def list_legislators(self, query: LegislatorQuery | None = None) -> list[Legislator]: ...

    async def get_legislator(self, legislator_id: str) -> Legislator | None: ...

    async def create_legislator(self, data: dict[str, Any]) -> Legislator: ...

    async def update_legislator(self, legislator_id: str, changes: dict[str, Any]) -> Legislator: ...

    async def delete_legislator(self, legislator_id: str) -> None: ...

    # Motions
    async def list_motions(
        self, query: MotionQuery | None = None, today: datetime.date | None = None
    ) -> list[Motion]: ...

    async def get_motion(self, motion_id: str) -> Motion | None: ...

    async def create_motion(self, data: dict[str, Any]) -> Motion: ...

    async def update_motion(self, motion_id: str, changes: dict[str, Any]) -> Motion: ...

    async def delete_motion(self, motion_id: str) -> None: ...

    # Vote records
    async def list_vote_records(
        self, legislator_id: str | None = None, motion_id: str | None = None
    ) -> list[VoteRecord]: ...

    async def get_vote_record(self, vote_record_id: str) -> VoteRecord | None: ...

    async def create_vote_record(self, draft: VoteRecordDraft) -> VoteRecord: ...

    async def create_vote_records_batch(self, drafts: Sequence[VoteRecordDraft]) -> int: ...

    async def update_vote_record(self, vote_record_id: str, position: Position) -> VoteRecord: ...

    async def delete_vote_record(self, vote_record_id: str) -> None: ...

    # Counts
    async def count(self, model: type[Legislator] | type[Motion] | type[VoteRecord]) -> int: ...
