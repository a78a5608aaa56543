# Standard library imports
from dataclasses import dataclass
import datetime

# Local application imports
from votetrack.core.exceptions import NotFoundError, ReferentialError
from votetrack.core.monitoring.logging import get_logger
from votetrack.gateway.protocol import PersistenceGateway
from votetrack.models.parliament.enums import Position
from votetrack.models.parliament.motion import Motion
from votetrack.models.parliament.vote_record import VoteRecord
from votetrack.schemas.parliament.motion_schemas import MotionCreate, MotionUpdate
from votetrack.schemas.parliament.query_schemas import MotionQuery, VoteRecordQuery
from votetrack.services.query_services import available_topics, filter_vote_records
from votetrack.services.tally_services import Tally, TallyComparison, compare_tallies, tally_motion

logger = get_logger("services.motions")


@dataclass(frozen=True)
class MotionDetail:
    motion: Motion
    records: list[VoteRecord]
    tally: Tally
    comparison: TallyComparison

    def records_by_position(self) -> dict[Position, list[VoteRecord]]:
        grouped: dict[Position, list[VoteRecord]] = {position: [] for position in Position}
        for record in self.records:
            grouped[record.position].append(record)
        return grouped


async def list_motions(
    gateway: PersistenceGateway, query: MotionQuery | None = None, today: datetime.date | None = None
) -> list[Motion]:
    return await gateway.list_motions(query or MotionQuery(), today)


async def get_motion(gateway: PersistenceGateway, motion_id: str) -> Motion:
    motion = await gateway.get_motion(motion_id)
    if motion is None:
        raise NotFoundError(message="Motion not found", entity="Motion", entity_id=motion_id)
    return motion


async def get_motion_detail(
    gateway: PersistenceGateway, motion_id: str, query: VoteRecordQuery | None = None
) -> MotionDetail:
    """
    A motion with its derived tally and the stored-versus-derived comparison.

    The tally always covers every record; ``query`` only narrows the records
    returned for display.
    """
    motion = await get_motion(gateway, motion_id)
    records = await gateway.list_vote_records(motion_id=motion_id)
    tally = tally_motion(motion_id, records)
    comparison = compare_tallies(motion, tally)
    if not comparison.consistent:
        logger.debug(f"Stored totals of motion {motion_id} differ from vote records: {comparison.differences()}")
    if query is not None and query.is_filtered:
        records = filter_vote_records(records, query)
    return MotionDetail(motion=motion, records=records, tally=tally, comparison=comparison)


async def create_motion(gateway: PersistenceGateway, payload: MotionCreate) -> Motion:
    motion = await gateway.create_motion(payload.model_dump(mode="python"))
    logger.info(f"Created motion {motion.id}")
    return motion


async def update_motion(gateway: PersistenceGateway, motion_id: str, payload: MotionUpdate) -> Motion:
    # Every motion column is mandatory, so an explicit null means "leave unchanged"
    changes = {field: value for field, value in payload.model_dump(exclude_unset=True).items() if value is not None}
    return await gateway.update_motion(motion_id, changes)


async def delete_motion(gateway: PersistenceGateway, motion_id: str) -> None:
    """Delete a motion that has no vote records."""
    await get_motion(gateway, motion_id)
    dependents = await gateway.list_vote_records(motion_id=motion_id)
    if dependents:
        raise ReferentialError(
            message="Motion still has vote records", entity="Motion", entity_id=motion_id, dependents=len(dependents)
        )
    await gateway.delete_motion(motion_id)
    logger.info(f"Deleted motion {motion_id}")


async def get_motion_topics(gateway: PersistenceGateway) -> list[str]:
    return available_topics(await gateway.list_motions())
