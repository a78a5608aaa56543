"""Tests for in-memory search and filtering."""

import datetime

import pytest

from votetrack.models import Chamber, Legislator, Motion, MotionOutcome, Position, VoteRecord
from votetrack.schemas.parliament.query_schemas import DateRange, LegislatorQuery, MotionQuery, VoteRecordQuery
from votetrack.services.query_services import (
    available_parties,
    available_regions,
    available_topics,
    filter_legislators,
    filter_motions,
    filter_vote_records,
)

TODAY = datetime.date(2024, 6, 15)


@pytest.fixture
def legislators() -> list[Legislator]:
    return [
        Legislator(id="l3", name="Cristina Marin", party="PSD", chamber=Chamber.DEPUTIES, region="Timis"),
        Legislator(id="l2", name="Bogdan Ionescu", party="PNL", chamber=Chamber.SENATE, region="Iasi"),
        Legislator(id="l1", name="Ana Popescu", party="PSD", chamber=Chamber.DEPUTIES, region="Cluj"),
    ]


def make_motion(motion_id: str, title: str, date: datetime.date, topics: list[str], **kwargs) -> Motion:
    return Motion(
        id=motion_id,
        title=title,
        description=kwargs.get("description", ""),
        chamber=kwargs.get("chamber", Chamber.DEPUTIES),
        date=date,
        topics=topics,
        outcome=MotionOutcome.PASSED,
    )


@pytest.fixture
def motions() -> list[Motion]:
    return [
        make_motion("v2", "Education reform", datetime.date(2023, 11, 2), ["education"], chamber=Chamber.SENATE),
        make_motion("v1", "Health budget", datetime.date(2024, 3, 12), ["health", "budget"]),
        make_motion("v3", "Road tolls", datetime.date(2022, 5, 1), ["transport", "budget"], description="Highway fees"),
    ]


class TestFilterLegislators:
    """Tests for legislator filtering."""

    def test_no_filters_returns_everyone_by_name(self, legislators) -> None:
        names = [item.name for item in filter_legislators(legislators)]
        assert names == ["Ana Popescu", "Bogdan Ionescu", "Cristina Marin"]

    def test_party_filter(self, legislators) -> None:
        """Only PSD members, in name order."""
        result = filter_legislators(legislators, LegislatorQuery(party="PSD"))
        assert [item.id for item in result] == ["l1", "l3"]

    def test_term_is_case_insensitive_and_covers_region(self, legislators) -> None:
        assert [item.id for item in filter_legislators(legislators, LegislatorQuery(term="IAS"))] == ["l2"]
        assert [item.id for item in filter_legislators(legislators, LegislatorQuery(term="popescu"))] == ["l1"]

    def test_order_ignores_case(self, legislators) -> None:
        legislators.append(Legislator(id="l4", name="ana Zeta", party="USR", chamber=Chamber.SENATE, region="Arad"))
        assert [item.id for item in filter_legislators(legislators)] == ["l1", "l4", "l2", "l3"]

    def test_term_folds_non_ascii_case(self, legislators) -> None:
        legislators.append(Legislator(id="l4", name="ȘTEFAN Pop", party="USR", chamber=Chamber.SENATE, region="Arad"))
        assert [item.id for item in filter_legislators(legislators, LegislatorQuery(term="ștefan"))] == ["l4"]

    def test_predicates_are_conjunctive(self, legislators) -> None:
        query = LegislatorQuery(party="PSD", chamber=Chamber.DEPUTIES, region="Timis")
        assert [item.id for item in filter_legislators(legislators, query)] == ["l3"]

    def test_no_match(self, legislators) -> None:
        assert filter_legislators(legislators, LegislatorQuery(party="USR")) == []

    def test_cleared_query_matches_unfiltered(self, legislators) -> None:
        query = LegislatorQuery(party="PSD", term="ana")
        cleared = query.cleared()
        assert not cleared.is_filtered
        assert cleared.cleared() == cleared
        assert filter_legislators(legislators, cleared) == filter_legislators(legislators)


class TestFilterQuery:
    """Tests for the immutable query configuration."""

    def test_blank_strings_are_unset(self) -> None:
        query = LegislatorQuery(term="   ", party="")
        assert query.term is None
        assert query.party is None
        assert not query.is_filtered

    def test_refine_returns_new_query(self) -> None:
        query = LegislatorQuery(party="PSD")
        refined = query.refine(region="Cluj")
        assert refined == LegislatorQuery(party="PSD", region="Cluj")
        assert query.region is None

    def test_refine_with_same_value_is_unchanged(self, legislators) -> None:
        query = LegislatorQuery(party="PSD")
        assert query.refine(party="PSD") == query
        assert filter_legislators(legislators, query.refine(party="PSD")) == filter_legislators(legislators, query)

    def test_refine_validates(self) -> None:
        refined = MotionQuery().refine(chamber="SENATE", date_range="last_year")
        assert refined.chamber is Chamber.SENATE
        assert refined.date_range is DateRange.LAST_YEAR


class TestDateRange:
    """Tests for calendar-year buckets."""

    def test_this_year_runs_to_today(self) -> None:
        assert DateRange.THIS_YEAR.bounds(TODAY) == (datetime.date(2024, 1, 1), datetime.date(2024, 6, 16))

    def test_last_year(self) -> None:
        assert DateRange.LAST_YEAR.bounds(TODAY) == (datetime.date(2023, 1, 1), datetime.date(2024, 1, 1))

    def test_explicit_bounds_intersect_bucket(self) -> None:
        query = MotionQuery(date_range=DateRange.THIS_YEAR, date_to=datetime.date(2024, 3, 31))
        assert query.date_bounds(TODAY) == (datetime.date(2024, 1, 1), datetime.date(2024, 4, 1))


    def test_latest_representable_date_leaves_range_open(self) -> None:
        assert MotionQuery(date_to=datetime.date.max).date_bounds(TODAY) == (None, None)
        query = MotionQuery(date_from=datetime.date(2024, 1, 1), date_to=datetime.date.max)
        assert query.date_bounds(TODAY) == (datetime.date(2024, 1, 1), None)


class TestFilterMotions:
    """Tests for motion filtering."""

    def test_newest_first(self, motions) -> None:
        assert [item.id for item in filter_motions(motions, today=TODAY)] == ["v1", "v2", "v3"]

    def test_this_year(self, motions) -> None:
        result = filter_motions(motions, MotionQuery(date_range=DateRange.THIS_YEAR), today=TODAY)
        assert [item.id for item in result] == ["v1"]

    def test_last_year(self, motions) -> None:
        result = filter_motions(motions, MotionQuery(date_range=DateRange.LAST_YEAR), today=TODAY)
        assert [item.id for item in result] == ["v2"]

    def test_topic_is_exact_membership(self, motions) -> None:
        assert [item.id for item in filter_motions(motions, MotionQuery(topic="budget"), today=TODAY)] == ["v1", "v3"]
        assert filter_motions(motions, MotionQuery(topic="budg"), today=TODAY) == []

    def test_term_covers_description(self, motions) -> None:
        assert [item.id for item in filter_motions(motions, MotionQuery(term="highway"), today=TODAY)] == ["v3"]

    def test_inclusive_explicit_dates(self, motions) -> None:
        query = MotionQuery(date_from=datetime.date(2023, 11, 2), date_to=datetime.date(2024, 3, 12))
        assert [item.id for item in filter_motions(motions, query, today=TODAY)] == ["v1", "v2"]

    def test_latest_representable_date_keeps_everything(self, motions) -> None:
        result = filter_motions(motions, MotionQuery(date_to=datetime.date.max), today=TODAY)
        assert [item.id for item in result] == ["v1", "v2", "v3"]

    def test_chamber(self, motions) -> None:
        result = filter_motions(motions, MotionQuery(chamber=Chamber.SENATE), today=TODAY)
        assert [item.id for item in result] == ["v2"]


class TestFilterVoteRecords:
    """Tests for vote record filtering."""

    @pytest.fixture
    def records(self, legislators, motions) -> list[VoteRecord]:
        by_id = {item.id: item for item in [*legislators, *motions]}
        rows = [
            ("r1", "l3", "v1", Position.FOR),
            ("r2", "l1", "v1", Position.AGAINST),
            ("r3", "l2", "v2", Position.ABSTAIN),
            ("r4", "l1", "v3", Position.FOR),
        ]
        return [
            VoteRecord(
                id=record_id,
                legislator_id=legislator_id,
                motion_id=motion_id,
                position=position,
                legislator=by_id[legislator_id],
                motion=by_id[motion_id],
            )
            for record_id, legislator_id, motion_id, position in rows
        ]

    def test_newest_motion_then_legislator_name(self, records) -> None:
        assert [item.id for item in filter_vote_records(records)] == ["r2", "r1", "r3", "r4"]

    def test_position(self, records) -> None:
        result = filter_vote_records(records, VoteRecordQuery(position=Position.FOR))
        assert [item.id for item in result] == ["r1", "r4"]

    def test_term_matches_motion_title(self, records) -> None:
        result = filter_vote_records(records, VoteRecordQuery(term="education"))
        assert [item.id for item in result] == ["r3"]

    def test_legislator_id(self, records) -> None:
        result = filter_vote_records(records, VoteRecordQuery(legislator_id="l1"))
        assert [item.id for item in result] == ["r2", "r4"]


class TestFacets:
    """Tests for the distinct value lists behind the filter controls."""

    def test_parties_and_regions_sorted_distinct(self, legislators) -> None:
        assert available_parties(legislators) == ["PNL", "PSD"]
        assert available_regions(legislators) == ["Cluj", "Iasi", "Timis"]

    def test_topics_first_seen_order(self, motions) -> None:
        assert available_topics(motions) == ["education", "health", "budget", "transport"]
