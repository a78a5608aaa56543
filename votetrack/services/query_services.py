"""Search and filter over legislators, motions and vote records.

A query configuration is evaluated two ways that must agree: in memory over
already-fetched rows (``filter_*``) and as SQL clauses for the gateway
(``*_clauses``). The engine keeps no state between calls.
"""

# Standard library imports
from collections.abc import Iterable
import datetime

# Third-party imports
from sqlalchemy import ColumnElement, or_

# Local application imports
from votetrack.models.parliament.legislator import Legislator
from votetrack.models.parliament.motion import Motion
from votetrack.models.parliament.vote_record import VoteRecord
from votetrack.schemas.parliament.query_schemas import LegislatorQuery, MotionQuery, VoteRecordQuery


def _contains(haystack: str | None, term: str) -> bool:
    return haystack is not None and term.casefold() in haystack.casefold()


def legislator_sort_key(legislator: Legislator) -> tuple[str, str]:
    return legislator.name.casefold(), legislator.id or ""


def motion_sort_key(motion: Motion) -> tuple[int, str]:
    # Newest first, then by id for a stable order among same-day motions
    return -motion.date.toordinal(), motion.id or ""


# ---- Legislators ----


def legislator_matches(legislator: Legislator, query: LegislatorQuery) -> bool:
    if query.term is not None and not any(
        _contains(value, query.term) for value in (legislator.name, legislator.party, legislator.region)
    ):
        return False
    if query.chamber is not None and legislator.chamber != query.chamber:
        return False
    if query.party is not None and legislator.party != query.party:
        return False
    if query.region is not None and legislator.region != query.region:
        return False
    return True


def filter_legislators(legislators: Iterable[Legislator], query: LegislatorQuery | None = None) -> list[Legislator]:
    """Legislators satisfying every supplied predicate, ordered by name."""
    query = query or LegislatorQuery()
    return sorted((item for item in legislators if legislator_matches(item, query)), key=legislator_sort_key)


def legislator_clauses(query: LegislatorQuery) -> list[ColumnElement[bool]]:
    clauses: list[ColumnElement[bool]] = []
    if query.term is not None:
        clauses.append(
            or_(
                Legislator.name.icontains(query.term, autoescape=True),
                Legislator.party.icontains(query.term, autoescape=True),
                Legislator.region.icontains(query.term, autoescape=True),
            )
        )
    if query.chamber is not None:
        clauses.append(Legislator.chamber == query.chamber)
    if query.party is not None:
        clauses.append(Legislator.party == query.party)
    if query.region is not None:
        clauses.append(Legislator.region == query.region)
    return clauses


# ---- Motions ----


def motion_matches_topic(motion: Motion, query: MotionQuery) -> bool:
    return query.topic is None or query.topic in (motion.topics or [])


def motion_matches(motion: Motion, query: MotionQuery, today: datetime.date | None = None) -> bool:
    if query.term is not None and not (
        _contains(motion.title, query.term) or _contains(motion.description, query.term)
    ):
        return False
    if query.chamber is not None and motion.chamber != query.chamber:
        return False
    if not motion_matches_topic(motion, query):
        return False
    start, end = query.date_bounds(today or datetime.date.today())
    if start is not None and motion.date < start:
        return False
    if end is not None and motion.date >= end:
        return False
    return True


def filter_motions(
    motions: Iterable[Motion],
    query: MotionQuery | None = None,
    today: datetime.date | None = None,
) -> list[Motion]:
    """Motions satisfying every supplied predicate, newest first."""
    query = query or MotionQuery()
    today = today or datetime.date.today()
    return sorted((item for item in motions if motion_matches(item, query, today)), key=motion_sort_key)


def motion_clauses(query: MotionQuery, today: datetime.date | None = None) -> list[ColumnElement[bool]]:
    """SQL form of every motion predicate except topic membership.

    Topics live in a JSON column whose containment operators differ per
    database, so callers apply ``motion_matches_topic`` to the fetched rows.
    """
    clauses: list[ColumnElement[bool]] = []
    if query.term is not None:
        clauses.append(
            or_(
                Motion.title.icontains(query.term, autoescape=True),
                Motion.description.icontains(query.term, autoescape=True),
            )
        )
    if query.chamber is not None:
        clauses.append(Motion.chamber == query.chamber)
    start, end = query.date_bounds(today or datetime.date.today())
    if start is not None:
        clauses.append(Motion.date >= start)
    if end is not None:
        clauses.append(Motion.date < end)
    return clauses


# ---- Vote records ----


def vote_record_matches(record: VoteRecord, query: VoteRecordQuery) -> bool:
    if query.legislator_id is not None and record.legislator_id != query.legislator_id:
        return False
    if query.motion_id is not None and record.motion_id != query.motion_id:
        return False
    if query.position is not None and record.position != query.position:
        return False
    if query.term is not None:
        haystacks = [record.legislator.name, record.legislator.party, record.motion.title, record.position.value]
        if not any(_contains(value, query.term) for value in haystacks):
            return False
    return True


def filter_vote_records(records: Iterable[VoteRecord], query: VoteRecordQuery | None = None) -> list[VoteRecord]:
    """Matching records, newest motion first, then by legislator name.

    Records must carry their legislator and motion when a term is supplied.
    """
    query = query or VoteRecordQuery()
    matched = [record for record in records if vote_record_matches(record, query)]
    matched.sort(key=lambda record: (legislator_sort_key(record.legislator), record.id or ""))
    matched.sort(key=lambda record: motion_sort_key(record.motion))
    return matched


# ---- Facets ----


def available_parties(legislators: Iterable[Legislator]) -> list[str]:
    return sorted({legislator.party for legislator in legislators})


def available_regions(legislators: Iterable[Legislator]) -> list[str]:
    return sorted({legislator.region for legislator in legislators})


def available_topics(motions: Iterable[Motion]) -> list[str]:
    """Every topic label in first-seen order across ``motions``."""
    seen: dict[str, None] = {}
    for motion in motions:
        for topic in motion.topics or []:
            seen.setdefault(topic, None)
    return list(seen)
