"""Vote tallies for motions and legislators.

Tallies are recomputed from vote records on every read. The totals stored on a
motion are administrator-entered and are only compared, never overwritten.
"""

# Standard library imports
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

# Local application imports
from votetrack.models.parliament.enums import Position
from votetrack.models.parliament.motion import Motion


class PositionedRecord(Protocol):
    legislator_id: str
    motion_id: str
    position: Position


@dataclass(frozen=True)
class Tally:
    """Four-way position count."""

    for_: int = 0
    against: int = 0
    abstain: int = 0
    absent: int = 0

    @property
    def total(self) -> int:
        return self.for_ + self.against + self.abstain + self.absent

    def count(self, position: Position) -> int:
        return {
            Position.FOR: self.for_,
            Position.AGAINST: self.against,
            Position.ABSTAIN: self.abstain,
            Position.ABSENT: self.absent,
        }[position]

    def percentage(self, position: Position) -> int:
        """Share of ``position`` in whole percent, rounded half up; 0 for an empty tally."""
        if self.total == 0:
            return 0
        share = Decimal(self.count(position) * 100) / Decimal(self.total)
        return int(share.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    def percentages(self) -> dict[Position, int]:
        return {position: self.percentage(position) for position in Position}

    def as_dict(self) -> dict[str, int]:
        return {
            "for": self.for_,
            "against": self.against,
            "abstain": self.abstain,
            "absent": self.absent,
            "total": self.total,
        }


@dataclass(frozen=True)
class TallyComparison:
    """Stored motion totals side by side with the totals derived from vote records."""

    stored: Tally
    derived: Tally

    @property
    def consistent(self) -> bool:
        return self.stored == self.derived

    def differences(self) -> dict[Position, int]:
        """Stored minus derived count, for positions that disagree."""
        return {
            position: self.stored.count(position) - self.derived.count(position)
            for position in Position
            if self.stored.count(position) != self.derived.count(position)
        }


def count_positions(records: Iterable[PositionedRecord]) -> Tally:
    """Partition ``records`` into the four position buckets."""
    counts = dict.fromkeys(Position, 0)
    for record in records:
        counts[Position(record.position)] += 1
    return Tally(
        for_=counts[Position.FOR],
        against=counts[Position.AGAINST],
        abstain=counts[Position.ABSTAIN],
        absent=counts[Position.ABSENT],
    )


def tally_motion(motion_id: str, records: Iterable[PositionedRecord]) -> Tally:
    """Tally of every recorded position on ``motion_id``; other motions' records are ignored."""
    return count_positions(record for record in records if record.motion_id == motion_id)


def tally_legislator(legislator_id: str, records: Iterable[PositionedRecord]) -> Tally:
    """Voting behaviour of ``legislator_id`` across all motions."""
    return count_positions(record for record in records if record.legislator_id == legislator_id)


def stored_tally(motion: Motion) -> Tally:
    return Tally(
        for_=motion.total_for,
        against=motion.total_against,
        abstain=motion.total_abstain,
        absent=motion.total_absent,
    )


def compare_tallies(motion: Motion, derived: Tally) -> TallyComparison:
    return TallyComparison(stored=stored_tally(motion), derived=derived)
