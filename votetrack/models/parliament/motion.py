# Standard library imports
import datetime

# Third-party imports
from sqlalchemy import JSON, CheckConstraint, Date, Enum as SQLEnum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

# Local application imports
from votetrack.models.base import Base
from votetrack.models.mixins.uuid_timestamp import IdTimeStampMixin
from votetrack.models.parliament.enums import Chamber, MotionOutcome


class Motion(IdTimeStampMixin, Base):
    __tablename__ = "motions"
    __table_args__ = (
        CheckConstraint("total_for >= 0", name="ck_motions_total_for_non_negative"),
        CheckConstraint("total_against >= 0", name="ck_motions_total_against_non_negative"),
        CheckConstraint("total_abstain >= 0", name="ck_motions_total_abstain_non_negative"),
        CheckConstraint("total_absent >= 0", name="ck_motions_total_absent_non_negative"),
    )

    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    chamber: Mapped[Chamber] = mapped_column(SQLEnum(Chamber, name="chamber"), nullable=False, index=True)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False, index=True)
    topics: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)  # ordered, no duplicates
    outcome: Mapped[MotionOutcome] = mapped_column(SQLEnum(MotionOutcome, name="motion_outcome"), nullable=False)

    # Administrator-entered totals, kept independent of the vote records
    total_for: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_against: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_abstain: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_absent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __str__(self) -> str:
        return f"Motion: {self.title} ({self.date.isoformat()})"
