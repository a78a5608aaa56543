# Third-party imports
from pydantic import BaseModel, ConfigDict, Field

# Local application imports
from votetrack.models.parliament.enums import Position
from votetrack.schemas.parliament.legislator_schemas import LegislatorResponse
from votetrack.schemas.parliament.motion_schemas import MotionResponse, MotionSummary
from votetrack.schemas.parliament.vote_record_schemas import VoteRecordDetail
from votetrack.services.tally_services import Tally, TallyComparison


class PositionShare(BaseModel):
    count: int
    percentage: int


class TallyResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    for_: PositionShare = Field(..., alias="for")
    against: PositionShare
    abstain: PositionShare
    absent: PositionShare
    total: int

    @classmethod
    def from_tally(cls, tally: Tally) -> "TallyResponse":
        shares = {
            position: PositionShare(count=tally.count(position), percentage=tally.percentage(position))
            for position in Position
        }
        return cls(
            for_=shares[Position.FOR],
            against=shares[Position.AGAINST],
            abstain=shares[Position.ABSTAIN],
            absent=shares[Position.ABSENT],
            total=tally.total,
        )


class TallyComparisonResponse(BaseModel):
    stored: TallyResponse
    derived: TallyResponse
    consistent: bool
    differences: dict[Position, int]

    @classmethod
    def from_comparison(cls, comparison: TallyComparison) -> "TallyComparisonResponse":
        return cls(
            stored=TallyResponse.from_tally(comparison.stored),
            derived=TallyResponse.from_tally(comparison.derived),
            consistent=comparison.consistent,
            differences=comparison.differences(),
        )


class LegislatorProfileResponse(BaseModel):
    legislator: LegislatorResponse
    tally: TallyResponse
    votes: list[VoteRecordDetail]


class MotionDetailResponse(BaseModel):
    motion: MotionResponse
    tally: TallyResponse
    tallies: TallyComparisonResponse
    records: dict[Position, list[VoteRecordDetail]]


class DashboardResponse(BaseModel):
    total_legislators: int
    total_motions: int
    total_vote_records: int
    recent_motions: list[MotionSummary]
    legislators_without_records: list[LegislatorResponse]
    motions_with_tally_gaps: int
