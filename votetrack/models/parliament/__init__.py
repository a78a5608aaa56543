# Local application imports
from votetrack.models.parliament.enums import Chamber, MotionOutcome, Position
from votetrack.models.parliament.legislator import Legislator
from votetrack.models.parliament.motion import Motion
from votetrack.models.parliament.vote_record import VoteRecord

__all__ = ["Chamber", "Legislator", "Motion", "MotionOutcome", "Position", "VoteRecord"]
