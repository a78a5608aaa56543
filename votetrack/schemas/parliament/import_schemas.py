# Third-party imports
from pydantic import BaseModel, ConfigDict, Field

# Local application imports
from votetrack.services.import_services import ConflictPolicy, ConflictSource, ImportReport


class VoteRecordImportRequest(BaseModel):
    content: str = Field(..., min_length=1, description="Delimited text with a header row")
    delimiter: str | None = Field(None, min_length=1, max_length=1)
    on_conflict: ConflictPolicy = ConflictPolicy.REJECT
    strict: bool = False

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "content": "legislatorId,motionId,position\nl1,v1,FOR\nl2,v1,AGAINST",
                "on_conflict": "reject",
            }
        }
    )


class MalformedRowResponse(BaseModel):
    line_no: int
    reason: str


class ImportConflictResponse(BaseModel):
    line_no: int
    legislator_id: str
    motion_id: str
    source: ConflictSource
    existing_vote_record_id: str | None = None
    first_line_no: int | None = None


class VoteRecordImportResponse(BaseModel):
    imported: int
    candidates: int
    skipped: int
    malformed: list[MalformedRowResponse]
    conflicts: list[ImportConflictResponse]

    @classmethod
    def from_report(cls, report: ImportReport) -> "VoteRecordImportResponse":
        return cls(
            imported=report.imported,
            candidates=report.candidates,
            skipped=report.skipped,
            malformed=[MalformedRowResponse(line_no=row.line_no, reason=row.reason) for row in report.malformed],
            conflicts=[ImportConflictResponse(**conflict.as_dict()) for conflict in report.conflicts],
        )
