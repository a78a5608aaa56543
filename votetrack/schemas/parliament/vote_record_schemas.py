# Standard library imports
from datetime import datetime
from typing import Annotated

# Third-party imports
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

# Local application imports
from votetrack.models.parliament.enums import Position
from votetrack.schemas.parliament.legislator_schemas import LegislatorSummary
from votetrack.schemas.parliament.motion_schemas import MotionSummary


def parse_position(value: object) -> object:
    # Positions are accepted in any case and stored upper-case
    if isinstance(value, str):
        return value.strip().upper()
    return value


PositionInput = Annotated[Position, BeforeValidator(parse_position)]


class VoteRecordCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    legislator_id: str = Field(..., min_length=1, max_length=64)
    motion_id: str = Field(..., min_length=1, max_length=64)
    position: PositionInput


class VoteRecordUpdate(BaseModel):
    position: PositionInput


class VoteRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    legislator_id: str
    motion_id: str
    position: Position
    created_at: datetime
    updated_at: datetime


class VoteRecordDetail(VoteRecordResponse):
    legislator: LegislatorSummary
    motion: MotionSummary
