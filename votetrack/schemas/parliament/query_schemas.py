# Standard library imports
import datetime
from enum import Enum
from typing import Any, Self

# Third-party imports
from pydantic import BaseModel, ConfigDict, field_validator

# Local application imports
from votetrack.models.parliament.enums import Chamber, Position


class DateRange(str, Enum):
    THIS_YEAR = "this_year"
    LAST_YEAR = "last_year"

    def bounds(self, today: datetime.date) -> tuple[datetime.date, datetime.date]:
        """Half-open ``[start, end)`` calendar bounds of the bucket relative to ``today``."""
        year_start = datetime.date(today.year, 1, 1)
        if self is DateRange.THIS_YEAR:
            return year_start, today + datetime.timedelta(days=1)
        return datetime.date(today.year - 1, 1, 1), year_start


class FilterQuery(BaseModel):
    """
    Immutable filter configuration.

    Blank strings mean "not supplied", so a cleared form field and an omitted
    query parameter filter the same way.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_filtered(self) -> bool:
        return any(value is not None for value in self.model_dump().values())

    def refine(self, **changes: Any) -> Self:
        """Return a copy with ``changes`` applied and re-validated."""
        return type(self).model_validate({**self.model_dump(), **changes})

    def cleared(self) -> Self:
        return type(self)()


class LegislatorQuery(FilterQuery):
    term: str | None = None
    chamber: Chamber | None = None
    party: str | None = None
    region: str | None = None


class MotionQuery(FilterQuery):
    term: str | None = None
    chamber: Chamber | None = None
    topic: str | None = None
    date_range: DateRange | None = None
    date_from: datetime.date | None = None
    date_to: datetime.date | None = None

    def date_bounds(self, today: datetime.date) -> tuple[datetime.date | None, datetime.date | None]:
        """Intersect the bucket and the explicit bounds into one half-open range."""
        start, end = self.date_from, None
        # date.max has no successor and leaves the range open-ended
        if self.date_to is not None and self.date_to < datetime.date.max:
            end = self.date_to + datetime.timedelta(days=1)
        if self.date_range is not None:
            bucket_start, bucket_end = self.date_range.bounds(today)
            start = bucket_start if start is None else max(start, bucket_start)
            end = bucket_end if end is None else min(end, bucket_end)
        return start, end


class VoteRecordQuery(FilterQuery):
    term: str | None = None
    position: Position | None = None
    legislator_id: str | None = None
    motion_id: str | None = None
