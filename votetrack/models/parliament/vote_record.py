# Third-party imports
from sqlalchemy import Enum as SQLEnum, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

# Local application imports
from votetrack.models.base import Base
from votetrack.models.mixins.uuid_timestamp import IdTimeStampMixin
from votetrack.models.parliament.enums import Position
from votetrack.models.parliament.legislator import Legislator
from votetrack.models.parliament.motion import Motion

UNIQUE_LEGISLATOR_MOTION = "uq_vote_records_legislator_motion"


class VoteRecord(IdTimeStampMixin, Base):
    __tablename__ = "vote_records"
    __table_args__ = (UniqueConstraint("legislator_id", "motion_id", name=UNIQUE_LEGISLATOR_MOTION),)

    legislator_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("legislators.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    motion_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("motions.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    position: Mapped[Position] = mapped_column(SQLEnum(Position, name="vote_position"), nullable=False)

    # Loaded eagerly so joined summaries never trigger lazy IO on an async session
    legislator: Mapped[Legislator] = relationship(Legislator, lazy="selectin")
    motion: Mapped[Motion] = relationship(Motion, lazy="selectin")

    def __str__(self) -> str:
        return f"VoteRecord: {self.legislator_id} on {self.motion_id} -> {self.position.value}"
