# Third-party imports
from fastapi import APIRouter, Query

# Local application imports
from votetrack.dependancies.common import GatewayDep
from votetrack.schemas.parliament.legislator_schemas import LegislatorResponse
from votetrack.schemas.parliament.motion_schemas import MotionSummary
from votetrack.schemas.parliament.tally_schemas import DashboardResponse
from votetrack.services.dashboard_services import RECENT_LIMIT, get_dashboard_summary

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/", response_model=DashboardResponse)
async def get_dashboard(gateway: GatewayDep, limit: int = Query(RECENT_LIMIT, ge=1, le=50)):
    """Collection totals, the latest motions and legislators with no recorded votes"""
    summary = await get_dashboard_summary(gateway, limit=limit)
    return DashboardResponse(
        total_legislators=summary.total_legislators,
        total_motions=summary.total_motions,
        total_vote_records=summary.total_vote_records,
        recent_motions=[MotionSummary.model_validate(motion) for motion in summary.recent_motions],
        legislators_without_records=[
            LegislatorResponse.model_validate(legislator) for legislator in summary.legislators_without_records
        ],
        motions_with_tally_gaps=summary.motions_with_tally_gaps,
    )
