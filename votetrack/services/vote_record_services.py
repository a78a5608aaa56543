# Local application imports
from votetrack.core.exceptions import DuplicateVoteRecordError, NotFoundError
from votetrack.core.monitoring.logging import get_contextual_logger
from votetrack.gateway.protocol import PersistenceGateway, VoteRecordDraft
from votetrack.models.parliament.enums import Position
from votetrack.models.parliament.vote_record import VoteRecord
from votetrack.schemas.parliament.query_schemas import VoteRecordQuery
from votetrack.schemas.parliament.vote_record_schemas import VoteRecordCreate
from votetrack.services.query_services import filter_vote_records


async def ensure_unique_vote_record(gateway: PersistenceGateway, legislator_id: str, motion_id: str) -> None:
    """
    Advisory duplicate check run before a single insert.

    Gives the caller the id of the record to edit instead. It is not atomic
    with the insert; the storage unique constraint still decides.
    """
    existing = await gateway.list_vote_records(legislator_id=legislator_id, motion_id=motion_id)
    if existing:
        raise DuplicateVoteRecordError(
            message="A record for this legislator and motion already exists. Edit the existing record instead.",
            legislator_id=legislator_id,
            motion_id=motion_id,
            vote_record_id=existing[0].id,
        )


async def create_vote_record(gateway: PersistenceGateway, payload: VoteRecordCreate) -> VoteRecord:
    """Create one vote record after checking both references and the pair's uniqueness."""
    log = get_contextual_logger(
        "services.vote_records", legislator_id=payload.legislator_id, motion_id=payload.motion_id
    )

    if await gateway.get_legislator(payload.legislator_id) is None:
        raise NotFoundError(message="Legislator not found", entity="Legislator", entity_id=payload.legislator_id)
    if await gateway.get_motion(payload.motion_id) is None:
        raise NotFoundError(message="Motion not found", entity="Motion", entity_id=payload.motion_id)

    try:
        await ensure_unique_vote_record(gateway, payload.legislator_id, payload.motion_id)
    except DuplicateVoteRecordError:
        log.info("Rejected duplicate vote record")
        raise

    draft = VoteRecordDraft(legislator_id=payload.legislator_id, motion_id=payload.motion_id, position=payload.position)
    record = await gateway.create_vote_record(draft)
    log.info(f"Created vote record {record.id}")
    return record


async def update_vote_record_position(gateway: PersistenceGateway, vote_record_id: str, position: Position) -> VoteRecord:
    # References are immutable; only the position can change
    return await gateway.update_vote_record(vote_record_id, position)


async def delete_vote_record(gateway: PersistenceGateway, vote_record_id: str) -> None:
    await gateway.delete_vote_record(vote_record_id)
    get_contextual_logger("services.vote_records", vote_record_id=vote_record_id).info("Deleted vote record")


async def search_vote_records(gateway: PersistenceGateway, query: VoteRecordQuery) -> list[VoteRecord]:
    """Records narrowed at the store by id filters, then by term and position in memory."""
    records = await gateway.list_vote_records(legislator_id=query.legislator_id, motion_id=query.motion_id)
    return filter_vote_records(records, query)
