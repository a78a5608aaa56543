# Standard library imports
from typing import Annotated

# Third-party imports
from fastapi import APIRouter, Query, status

# Local application imports
from votetrack.dependancies.common import AdminDep, GatewayDep, PaginationDep
from votetrack.schemas.common import BaseResponse
from votetrack.schemas.parliament.motion_schemas import MotionCreate, MotionResponse, MotionUpdate
from votetrack.schemas.parliament.query_schemas import MotionQuery, VoteRecordQuery
from votetrack.schemas.parliament.tally_schemas import MotionDetailResponse, TallyComparisonResponse, TallyResponse
from votetrack.schemas.parliament.vote_record_schemas import VoteRecordDetail
from votetrack.services import motion_services

router = APIRouter(prefix="/motions", tags=["Motions"])


@router.get("/", response_model=BaseResponse[list[MotionResponse]])
async def list_motions(
    query: Annotated[MotionQuery, Query()],
    pagination: PaginationDep,
    gateway: GatewayDep,
):
    """List motions matching every supplied filter, newest first"""
    motions = await motion_services.list_motions(gateway, query)
    page, meta = pagination.page(motions)
    return BaseResponse.success([MotionResponse.model_validate(item) for item in page], meta=meta)


@router.get("/topics", response_model=list[str])
async def get_motion_topics(gateway: GatewayDep):
    """Every topic label in use, in first-seen order"""
    return await motion_services.get_motion_topics(gateway)


@router.get("/{motion_id}", response_model=MotionDetailResponse)
async def get_motion(motion_id: str, gateway: GatewayDep):
    """Motion details with the tally derived from its vote records and the stored totals"""
    detail = await motion_services.get_motion_detail(gateway, motion_id)
    return MotionDetailResponse(
        motion=MotionResponse.model_validate(detail.motion),
        tally=TallyResponse.from_tally(detail.tally),
        tallies=TallyComparisonResponse.from_comparison(detail.comparison),
        records={
            position: [VoteRecordDetail.model_validate(record) for record in records]
            for position, records in detail.records_by_position().items()
        },
    )


@router.get("/{motion_id}/records", response_model=list[VoteRecordDetail])
async def get_motion_records(
    motion_id: str,
    record_query: Annotated[VoteRecordQuery, Query()],
    gateway: GatewayDep,
):
    """Vote records on a motion narrowed by position and search term"""
    detail = await motion_services.get_motion_detail(gateway, motion_id, record_query)
    return [VoteRecordDetail.model_validate(record) for record in detail.records]


@router.post("/", response_model=MotionResponse, status_code=status.HTTP_201_CREATED, dependencies=[AdminDep])
async def create_motion(motion_data: MotionCreate, gateway: GatewayDep):
    motion = await motion_services.create_motion(gateway, motion_data)
    return MotionResponse.model_validate(motion)


@router.patch("/{motion_id}", response_model=MotionResponse, dependencies=[AdminDep])
async def update_motion(motion_id: str, update_data: MotionUpdate, gateway: GatewayDep):
    """Update a motion; stored totals are administrator-entered and never derived"""
    motion = await motion_services.update_motion(gateway, motion_id, update_data)
    return MotionResponse.model_validate(motion)


@router.delete("/{motion_id}", dependencies=[AdminDep])
async def delete_motion(motion_id: str, gateway: GatewayDep):
    """Delete a motion (blocked while vote records reference it)"""
    await motion_services.delete_motion(gateway, motion_id)
    return {"message": "Motion deleted successfully"}
