# Standard library imports
from dataclasses import dataclass

# Local application imports
from votetrack.gateway.protocol import PersistenceGateway
from votetrack.models.parliament.legislator import Legislator
from votetrack.models.parliament.motion import Motion
from votetrack.models.parliament.vote_record import VoteRecord
from votetrack.services.tally_services import stored_tally, tally_motion

RECENT_LIMIT = 5


@dataclass(frozen=True)
class DashboardSummary:
    total_legislators: int
    total_motions: int
    total_vote_records: int
    recent_motions: list[Motion]
    legislators_without_records: list[Legislator]
    # Motions whose stored totals disagree with their vote records
    motions_with_tally_gaps: int


async def get_dashboard_summary(gateway: PersistenceGateway, limit: int = RECENT_LIMIT) -> DashboardSummary:
    motions = await gateway.list_motions()
    legislators = await gateway.list_legislators()
    records = await gateway.list_vote_records()

    voted = {record.legislator_id for record in records}
    without_records = [legislator for legislator in legislators if legislator.id not in voted]
    gaps = sum(1 for motion in motions if stored_tally(motion) != tally_motion(motion.id, records))

    return DashboardSummary(
        total_legislators=await gateway.count(Legislator),
        total_motions=await gateway.count(Motion),
        total_vote_records=await gateway.count(VoteRecord),
        recent_motions=motions[:limit],
        legislators_without_records=without_records[:limit],
        motions_with_tally_gaps=gaps,
    )
