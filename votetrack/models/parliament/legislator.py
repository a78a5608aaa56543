# Third-party imports
from sqlalchemy import Enum as SQLEnum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

# Local application imports
from votetrack.models.base import Base
from votetrack.models.mixins.uuid_timestamp import IdTimeStampMixin
from votetrack.models.parliament.enums import Chamber


class Legislator(IdTimeStampMixin, Base):
    __tablename__ = "legislators"

    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    party: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    chamber: Mapped[Chamber] = mapped_column(SQLEnum(Chamber, name="chamber"), nullable=False, index=True)
    region: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(320), nullable=True)

    # Vote records reference legislators one way only; deletes are guarded by
    # the RESTRICT foreign key on vote_records.legislator_id

    def __str__(self) -> str:
        return f"Legislator: {self.name} ({self.party}, {self.chamber.value})"
