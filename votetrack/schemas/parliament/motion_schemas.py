# Standard library imports
import datetime
from typing import Annotated

# Third-party imports
from pydantic import AfterValidator, BaseModel, ConfigDict, Field

# Local application imports
from votetrack.models.parliament.enums import Chamber, MotionOutcome


def normalize_topics(topics: list[str]) -> list[str]:
    """Strip labels and drop blanks and repeats, keeping first-seen order."""
    seen: dict[str, None] = {}
    for topic in topics:
        label = topic.strip()
        if label:
            seen.setdefault(label, None)
    return list(seen)


TopicList = Annotated[list[str], AfterValidator(normalize_topics)]


class MotionCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str | None = Field(None, min_length=1, max_length=64)
    title: str = Field(..., min_length=1, max_length=300)
    description: str = ""
    chamber: Chamber
    date: datetime.date
    topics: TopicList = Field(default_factory=list)
    outcome: MotionOutcome
    total_for: int = Field(0, ge=0)
    total_against: int = Field(0, ge=0)
    total_abstain: int = Field(0, ge=0)
    total_absent: int = Field(0, ge=0)


class MotionUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(None, min_length=1, max_length=300)
    description: str | None = None
    chamber: Chamber | None = None
    date: datetime.date | None = None
    topics: TopicList | None = None
    outcome: MotionOutcome | None = None
    total_for: int | None = Field(None, ge=0)
    total_against: int | None = Field(None, ge=0)
    total_abstain: int | None = Field(None, ge=0)
    total_absent: int | None = Field(None, ge=0)


class MotionSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    chamber: Chamber
    date: datetime.date
    outcome: MotionOutcome


class MotionResponse(MotionSummary):
    description: str
    topics: list[str]
    total_for: int
    total_against: int
    total_abstain: int
    total_absent: int
    created_at: datetime.datetime
    updated_at: datetime.datetime
