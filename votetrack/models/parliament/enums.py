# Standard library imports
import enum


class Chamber(str, enum.Enum):
    DEPUTIES = "DEPUTIES"
    SENATE = "SENATE"


class Position(str, enum.Enum):
    FOR = "FOR"
    AGAINST = "AGAINST"
    ABSTAIN = "ABSTAIN"
    ABSENT = "ABSENT"


class MotionOutcome(str, enum.Enum):
    PASSED = "PASSED"
    FAILED = "FAILED"
