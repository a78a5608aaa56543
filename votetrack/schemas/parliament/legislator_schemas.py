# Standard library imports
from datetime import datetime
from typing import Annotated

# Third-party imports
from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field

# Local application imports
from votetrack.models.parliament.enums import Chamber


def blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Forms submit an empty string for an untouched email field
OptionalEmail = Annotated[EmailStr | None, BeforeValidator(blank_to_none)]


class LegislatorCreate(BaseModel):
    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "name": "Ana Popescu",
                "party": "PSD",
                "chamber": "DEPUTIES",
                "region": "Cluj",
                "contact_email": "ana.popescu@example.com",
            }
        },
    )

    id: str | None = Field(None, min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=200)
    party: str = Field(..., min_length=1, max_length=100)
    chamber: Chamber
    region: str = Field(..., min_length=1, max_length=100)
    image_url: str | None = Field(None, max_length=500)
    bio: str | None = None
    contact_email: OptionalEmail = None


class LegislatorUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(None, min_length=1, max_length=200)
    party: str | None = Field(None, min_length=1, max_length=100)
    chamber: Chamber | None = None
    region: str | None = Field(None, min_length=1, max_length=100)
    image_url: str | None = Field(None, max_length=500)
    bio: str | None = None
    contact_email: OptionalEmail = None


class LegislatorSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    party: str
    chamber: Chamber
    region: str
    image_url: str | None = None


class LegislatorResponse(LegislatorSummary):
    bio: str | None
    contact_email: str | None
    created_at: datetime
    updated_at: datetime


class LegislatorFacets(BaseModel):
    parties: list[str]
    regions: list[str]
