"""
Database models package.

This package contains all SQLAlchemy models for the application.
"""

# Local application imports
from votetrack.models.base import Base
from votetrack.models.parliament import Chamber, Legislator, Motion, MotionOutcome, Position, VoteRecord

__all__ = [
    "Base",
    # Parliament models
    "Chamber",
    "Legislator",
    "Motion",
    "MotionOutcome",
    "Position",
    "VoteRecord",
]
