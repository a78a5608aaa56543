# Standard library imports
from typing import Annotated

# Third-party imports
from fastapi import APIRouter, File, Form, Query, UploadFile, status

# Local application imports
from votetrack.core.exceptions import ValidationError
from votetrack.core.monitoring.logging import get_logger
from votetrack.dependancies.common import AdminDep, GatewayDep, PaginationDep
from votetrack.schemas.common import BaseResponse
from votetrack.schemas.parliament.import_schemas import VoteRecordImportRequest, VoteRecordImportResponse
from votetrack.schemas.parliament.query_schemas import VoteRecordQuery
from votetrack.schemas.parliament.vote_record_schemas import (
    VoteRecordCreate,
    VoteRecordDetail,
    VoteRecordResponse,
    VoteRecordUpdate,
)
from votetrack.services import import_services, vote_record_services
from votetrack.services.import_services import ConflictPolicy

logger = get_logger("api.vote_records")

router = APIRouter(prefix="/vote-records", tags=["Vote Records"])


@router.get("/", response_model=BaseResponse[list[VoteRecordDetail]])
async def list_vote_records(
    query: Annotated[VoteRecordQuery, Query()],
    pagination: PaginationDep,
    gateway: GatewayDep,
):
    """Search vote records by legislator, motion, position and free text"""
    records = await vote_record_services.search_vote_records(gateway, query)
    page, meta = pagination.page(records)
    return BaseResponse.success([VoteRecordDetail.model_validate(record) for record in page], meta=meta)


@router.post(
    "/",
    response_model=VoteRecordResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[AdminDep],
)
async def create_vote_record(vote_data: VoteRecordCreate, gateway: GatewayDep):
    """Record one legislator's position on a motion; a second record for the pair is a 409"""
    record = await vote_record_services.create_vote_record(gateway, vote_data)
    return VoteRecordResponse.model_validate(record)


@router.patch("/{vote_record_id}", response_model=VoteRecordResponse, dependencies=[AdminDep])
async def update_vote_record(vote_record_id: str, update_data: VoteRecordUpdate, gateway: GatewayDep):
    record = await vote_record_services.update_vote_record_position(gateway, vote_record_id, update_data.position)
    return VoteRecordResponse.model_validate(record)


@router.delete("/{vote_record_id}", dependencies=[AdminDep])
async def delete_vote_record(vote_record_id: str, gateway: GatewayDep):
    await vote_record_services.delete_vote_record(gateway, vote_record_id)
    return {"message": "Vote record deleted successfully"}


@router.post("/import", response_model=VoteRecordImportResponse, dependencies=[AdminDep])
async def import_vote_records(import_data: VoteRecordImportRequest, gateway: GatewayDep):
    """
    Bulk import vote records from delimited text.

    The first non-blank line is a header. An unknown position anywhere fails the whole
    batch, as does any duplicate unless ``on_conflict`` is ``skip``.
    """
    report = await import_services.import_vote_records(
        gateway,
        import_data.content,
        delimiter=import_data.delimiter,
        on_conflict=import_data.on_conflict,
        strict=import_data.strict,
    )
    return VoteRecordImportResponse.from_report(report)


@router.post("/import/upload", response_model=VoteRecordImportResponse, dependencies=[AdminDep])
async def upload_vote_records(
    gateway: GatewayDep,
    file: UploadFile = File(...),
    delimiter: str | None = Form(None, min_length=1, max_length=1),
    on_conflict: ConflictPolicy = Form(ConflictPolicy.REJECT),
    strict: bool = Form(False),
):
    """Bulk import vote records from an uploaded CSV file"""
    raw = await file.read()
    try:
        content = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning(f"Rejected upload {file.filename!r}: not UTF-8")
        raise ValidationError(message="Uploaded file must be UTF-8 encoded text") from e

    report = await import_services.import_vote_records(
        gateway, content, delimiter=delimiter, on_conflict=on_conflict, strict=strict
    )
    return VoteRecordImportResponse.from_report(report)
