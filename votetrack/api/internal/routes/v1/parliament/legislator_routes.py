# Standard library imports
from typing import Annotated

# Third-party imports
from fastapi import APIRouter, Query, status

# Local application imports
from votetrack.dependancies.common import AdminDep, GatewayDep, PaginationDep
from votetrack.schemas.common import BaseResponse
from votetrack.schemas.parliament.legislator_schemas import (
    LegislatorCreate,
    LegislatorFacets,
    LegislatorResponse,
    LegislatorUpdate,
)
from votetrack.schemas.parliament.query_schemas import LegislatorQuery
from votetrack.schemas.parliament.tally_schemas import LegislatorProfileResponse, TallyResponse
from votetrack.schemas.parliament.vote_record_schemas import VoteRecordDetail
from votetrack.services import legislator_services

router = APIRouter(prefix="/legislators", tags=["Legislators"])


@router.get("/", response_model=BaseResponse[list[LegislatorResponse]])
async def list_legislators(
    query: Annotated[LegislatorQuery, Query()],
    pagination: PaginationDep,
    gateway: GatewayDep,
):
    """List legislators matching every supplied filter, ordered by name"""
    legislators = await legislator_services.list_legislators(gateway, query)
    page, meta = pagination.page(legislators)
    return BaseResponse.success([LegislatorResponse.model_validate(item) for item in page], meta=meta)


@router.get("/facets", response_model=LegislatorFacets)
async def get_legislator_facets(gateway: GatewayDep):
    """Distinct parties and regions for the filter controls"""
    parties, regions = await legislator_services.get_legislator_facets(gateway)
    return LegislatorFacets(parties=parties, regions=regions)


@router.get("/{legislator_id}", response_model=LegislatorResponse)
async def get_legislator(legislator_id: str, gateway: GatewayDep):
    legislator = await legislator_services.get_legislator(gateway, legislator_id)
    return LegislatorResponse.model_validate(legislator)


@router.get("/{legislator_id}/votes", response_model=LegislatorProfileResponse)
async def get_legislator_votes(legislator_id: str, gateway: GatewayDep):
    """Voting record of a legislator, newest motion first, with the position breakdown"""
    profile = await legislator_services.get_legislator_profile(gateway, legislator_id)
    return LegislatorProfileResponse(
        legislator=LegislatorResponse.model_validate(profile.legislator),
        tally=TallyResponse.from_tally(profile.tally),
        votes=[VoteRecordDetail.model_validate(record) for record in profile.records],
    )


@router.post(
    "/",
    response_model=LegislatorResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[AdminDep],
)
async def create_legislator(legislator_data: LegislatorCreate, gateway: GatewayDep):
    legislator = await legislator_services.create_legislator(gateway, legislator_data)
    return LegislatorResponse.model_validate(legislator)


@router.patch("/{legislator_id}", response_model=LegislatorResponse, dependencies=[AdminDep])
async def update_legislator(legislator_id: str, update_data: LegislatorUpdate, gateway: GatewayDep):
    legislator = await legislator_services.update_legislator(gateway, legislator_id, update_data)
    return LegislatorResponse.model_validate(legislator)


@router.delete("/{legislator_id}", dependencies=[AdminDep])
async def delete_legislator(legislator_id: str, gateway: GatewayDep):
    """Delete a legislator (blocked while vote records reference them)"""
    await legislator_services.delete_legislator(gateway, legislator_id)
    return {"message": "Legislator deleted successfully"}
