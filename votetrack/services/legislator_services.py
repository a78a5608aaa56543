# Standard library imports
from dataclasses import dataclass

# Local application imports
from votetrack.core.exceptions import NotFoundError, ReferentialError
from votetrack.core.monitoring.logging import get_logger
from votetrack.gateway.protocol import PersistenceGateway
from votetrack.models.parliament.legislator import Legislator
from votetrack.models.parliament.vote_record import VoteRecord
from votetrack.schemas.parliament.legislator_schemas import LegislatorCreate, LegislatorUpdate
from votetrack.schemas.parliament.query_schemas import LegislatorQuery
from votetrack.services.query_services import available_parties, available_regions
from votetrack.services.tally_services import Tally, tally_legislator

logger = get_logger("services.legislators")


@dataclass(frozen=True)
class LegislatorProfile:
    legislator: Legislator
    records: list[VoteRecord]
    tally: Tally


async def list_legislators(gateway: PersistenceGateway, query: LegislatorQuery | None = None) -> list[Legislator]:
    return await gateway.list_legislators(query or LegislatorQuery())


async def get_legislator(gateway: PersistenceGateway, legislator_id: str) -> Legislator:
    legislator = await gateway.get_legislator(legislator_id)
    if legislator is None:
        raise NotFoundError(message="Legislator not found", entity="Legislator", entity_id=legislator_id)
    return legislator


async def get_legislator_profile(gateway: PersistenceGateway, legislator_id: str) -> LegislatorProfile:
    """A legislator with their records, newest motion first, and voting breakdown."""
    legislator = await get_legislator(gateway, legislator_id)
    records = await gateway.list_vote_records(legislator_id=legislator_id)
    return LegislatorProfile(legislator=legislator, records=records, tally=tally_legislator(legislator_id, records))


async def create_legislator(gateway: PersistenceGateway, payload: LegislatorCreate) -> Legislator:
    legislator = await gateway.create_legislator(payload.model_dump(mode="python"))
    logger.info(f"Created legislator {legislator.id}")
    return legislator


async def update_legislator(gateway: PersistenceGateway, legislator_id: str, payload: LegislatorUpdate) -> Legislator:
    changes = payload.model_dump(exclude_unset=True)
    # Mandatory fields cannot be cleared
    for field in ("name", "party", "chamber", "region"):
        if field in changes and changes[field] is None:
            changes.pop(field)
    return await gateway.update_legislator(legislator_id, changes)


async def delete_legislator(gateway: PersistenceGateway, legislator_id: str) -> None:
    """Delete a legislator that has no vote records."""
    await get_legislator(gateway, legislator_id)
    dependents = await gateway.list_vote_records(legislator_id=legislator_id)
    if dependents:
        raise ReferentialError(
            message="Legislator still has vote records",
            entity="Legislator",
            entity_id=legislator_id,
            dependents=len(dependents),
        )
    await gateway.delete_legislator(legislator_id)
    logger.info(f"Deleted legislator {legislator_id}")


async def get_legislator_facets(gateway: PersistenceGateway) -> tuple[list[str], list[str]]:
    """Distinct parties and regions for the filter controls."""
    legislators = await gateway.list_legislators()
    return available_parties(legislators), available_regions(legislators)
