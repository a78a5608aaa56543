# Standard library imports
from datetime import UTC, datetime
import uuid

# Third-party imports
from sqlalchemy import TIMESTAMP, String, text
from sqlalchemy.orm import Mapped, mapped_column


def generate_id() -> str:
    return str(uuid.uuid4())


class IdTimeStampMixin:
    """A reusable mixin that:
    - Provides a text primary key named 'id', defaulting to a UUID4 string
    - Includes created_at and updated_at timestamps handled by the database (and SQLAlchemy)

    Identifiers are plain text so records imported from spreadsheets can keep
    the references they were exported with.
    """

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=generate_id, index=True)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=lambda: datetime.now(UTC),
    )
