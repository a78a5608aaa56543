"""Tests for vote record, legislator and motion services over the SQLAlchemy gateway."""

import datetime

import pytest

from votetrack.core.exceptions import DuplicateEntityError, DuplicateVoteRecordError, NotFoundError, ReferentialError
from votetrack.gateway import VoteRecordDraft
from votetrack.models import Chamber, Legislator, Motion, MotionOutcome, Position, VoteRecord
from votetrack.schemas.parliament.legislator_schemas import LegislatorUpdate
from votetrack.schemas.parliament.motion_schemas import MotionCreate
from votetrack.schemas.parliament.query_schemas import DateRange, LegislatorQuery, MotionQuery, VoteRecordQuery
from votetrack.schemas.parliament.vote_record_schemas import VoteRecordCreate
from votetrack.services import legislator_services, motion_services, vote_record_services
from votetrack.services.dashboard_services import get_dashboard_summary
from votetrack.services.query_services import filter_legislators, filter_motions
from votetrack.services.tally_services import Tally

TODAY = datetime.date(2024, 6, 15)


class TestCreateVoteRecord:
    """Tests for single-record creation and the duplicate guard."""

    async def test_create(self, gateway, seeded) -> None:
        record = await vote_record_services.create_vote_record(
            gateway, VoteRecordCreate(legislator_id="l1", motion_id="v1", position="for")
        )
        assert record.position is Position.FOR
        assert record.id

    async def test_duplicate_leaves_store_unchanged(self, gateway, seeded) -> None:
        payload = VoteRecordCreate(legislator_id="l1", motion_id="v1", position="FOR")
        first = await vote_record_services.create_vote_record(gateway, payload)

        with pytest.raises(DuplicateVoteRecordError) as exc_info:
            await vote_record_services.create_vote_record(
                gateway, VoteRecordCreate(legislator_id="l1", motion_id="v1", position="AGAINST")
            )
        assert exc_info.value.vote_record_id == first.id
        assert await gateway.count(VoteRecord) == 1
        assert (await gateway.get_vote_record(first.id)).position is Position.FOR

    async def test_storage_constraint_catches_unchecked_duplicates(self, gateway, seeded) -> None:
        """Writing straight to the gateway skips the pre-check; the unique constraint still holds."""
        first = await gateway.create_vote_record(VoteRecordDraft("l2", "v1", Position.ABSENT))
        first_id = first.id
        with pytest.raises(DuplicateVoteRecordError) as exc_info:
            await gateway.create_vote_record(VoteRecordDraft("l2", "v1", Position.FOR))
        assert exc_info.value.vote_record_id == first_id
        assert await gateway.count(VoteRecord) == 1

    async def test_unknown_legislator(self, gateway, seeded) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            await vote_record_services.create_vote_record(
                gateway, VoteRecordCreate(legislator_id="ghost", motion_id="v1", position="FOR")
            )
        assert exc_info.value.entity == "Legislator"

    async def test_unknown_motion(self, gateway, seeded) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            await vote_record_services.create_vote_record(
                gateway, VoteRecordCreate(legislator_id="l1", motion_id="ghost", position="FOR")
            )
        assert exc_info.value.entity == "Motion"


class TestUpdateAndDeleteVoteRecord:
    """Tests for editing and removing vote records."""

    async def test_update_position(self, gateway, seeded) -> None:
        record = await gateway.create_vote_record(VoteRecordDraft("l1", "v1", Position.FOR))
        updated = await vote_record_services.update_vote_record_position(gateway, record.id, Position.ABSTAIN)
        assert updated.position is Position.ABSTAIN
        assert updated.legislator_id == "l1"

    async def test_delete(self, gateway, seeded) -> None:
        record = await gateway.create_vote_record(VoteRecordDraft("l1", "v1", Position.FOR))
        await vote_record_services.delete_vote_record(gateway, record.id)
        assert await gateway.count(VoteRecord) == 0

    async def test_missing_record(self, gateway, seeded) -> None:
        with pytest.raises(NotFoundError):
            await vote_record_services.update_vote_record_position(gateway, "missing", Position.FOR)


class TestSearchVoteRecords:
    """Tests for searching stored vote records."""

    async def test_filters(self, gateway, seeded) -> None:
        await gateway.create_vote_records_batch(
            [
                VoteRecordDraft("l1", "v1", Position.FOR),
                VoteRecordDraft("l2", "v1", Position.AGAINST),
                VoteRecordDraft("l1", "v2", Position.AGAINST),
            ]
        )
        by_position = await vote_record_services.search_vote_records(
            gateway, VoteRecordQuery(position=Position.AGAINST)
        )
        assert [(item.legislator_id, item.motion_id) for item in by_position] == [("l2", "v1"), ("l1", "v2")]

        by_term = await vote_record_services.search_vote_records(gateway, VoteRecordQuery(term="popescu"))
        assert {item.motion_id for item in by_term} == {"v1", "v2"}


class TestLegislatorServices:
    """Tests for legislator listing, profiles and guarded deletes."""

    async def test_list_by_party(self, gateway, seeded) -> None:
        result = await legislator_services.list_legislators(gateway, LegislatorQuery(party="PSD"))
        assert [item.name for item in result] == ["Ana Popescu", "Cristina Marin"]

    async def test_term_search_in_database(self, gateway, seeded) -> None:
        result = await legislator_services.list_legislators(gateway, LegislatorQuery(term="ionescu"))
        assert [item.id for item in result] == ["l2"]

    async def test_profile(self, gateway, seeded) -> None:
        await gateway.create_vote_records_batch(
            [VoteRecordDraft("l1", "v1", Position.FOR), VoteRecordDraft("l1", "v2", Position.ABSENT)]
        )
        profile = await legislator_services.get_legislator_profile(gateway, "l1")
        assert [record.motion_id for record in profile.records] == ["v1", "v2"]
        assert profile.tally == Tally(for_=1, absent=1)

    async def test_update_ignores_null_for_required_fields(self, gateway, seeded) -> None:
        updated = await legislator_services.update_legislator(
            gateway, "l1", LegislatorUpdate(name=None, region="Brasov")
        )
        assert updated.name == "Ana Popescu"
        assert updated.region == "Brasov"

    async def test_delete_blocked_by_records(self, gateway, seeded) -> None:
        await gateway.create_vote_record(VoteRecordDraft("l1", "v1", Position.FOR))
        with pytest.raises(ReferentialError) as exc_info:
            await legislator_services.delete_legislator(gateway, "l1")
        assert exc_info.value.dependents == 1
        assert await gateway.get_legislator("l1") is not None

    async def test_delete(self, gateway, seeded) -> None:
        await legislator_services.delete_legislator(gateway, "l3")
        assert await gateway.count(Legislator) == 2

    async def test_duplicate_id_is_a_conflict(self, gateway, seeded) -> None:
        with pytest.raises(DuplicateEntityError) as exc_info:
            await gateway.create_legislator(
                {"id": "l1", "name": "Other Name", "party": "USR", "chamber": Chamber.SENATE, "region": "Arad"}
            )
        assert exc_info.value.details() == {"entity": "Legislator", "id": "l1"}
        assert await gateway.count(Legislator) == 3
        assert (await gateway.get_legislator("l1")).name == "Ana Popescu"

    async def test_database_order_ignores_case(self, gateway, seeded) -> None:
        await gateway.create_legislator(
            {"id": "l4", "name": "ana Zeta", "party": "USR", "chamber": Chamber.SENATE, "region": "Arad"}
        )
        result = await gateway.list_legislators(LegislatorQuery())
        assert [item.id for item in result] == ["l1", "l4", "l2", "l3"]
        assert result == filter_legislators(result)

    async def test_facets(self, gateway, seeded) -> None:
        parties, regions = await legislator_services.get_legislator_facets(gateway)
        assert parties == ["PNL", "PSD"]
        assert regions == ["Cluj", "Iasi", "Timis"]


class TestMotionServices:
    """Tests for motion listing and detail."""

    async def test_list_by_topic(self, gateway, seeded) -> None:
        result = await motion_services.list_motions(gateway, MotionQuery(topic="budget"))
        assert [item.id for item in result] == ["v1", "v2"]
        result = await motion_services.list_motions(gateway, MotionQuery(topic="health"))
        assert [item.id for item in result] == ["v1"]

    async def test_create_normalises_topics(self, gateway, seeded) -> None:
        motion = await motion_services.create_motion(
            gateway,
            MotionCreate(
                title="Pension indexation",
                chamber="SENATE",
                date="2024-05-01",
                topics=[" social ", "pensions", "social", ""],
                outcome="PASSED",
            ),
        )
        assert motion.topics == ["social", "pensions"]
        assert await gateway.count(Motion) == 3

    async def test_detail_keeps_stored_totals_apart(self, gateway, seeded) -> None:
        await gateway.create_vote_records_batch(
            [VoteRecordDraft("l1", "v2", Position.FOR), VoteRecordDraft("l2", "v2", Position.AGAINST)]
        )
        detail = await motion_services.get_motion_detail(gateway, "v2")
        assert detail.tally == Tally(for_=1, against=1)
        assert not detail.comparison.consistent
        assert detail.motion.total_for == 10
        assert [record.legislator_id for record in detail.records_by_position()[Position.FOR]] == ["l1"]

    async def test_detail_filter_does_not_change_tally(self, gateway, seeded) -> None:
        await gateway.create_vote_records_batch(
            [VoteRecordDraft("l1", "v1", Position.FOR), VoteRecordDraft("l2", "v1", Position.AGAINST)]
        )
        detail = await motion_services.get_motion_detail(gateway, "v1", VoteRecordQuery(position=Position.FOR))
        assert [record.legislator_id for record in detail.records] == ["l1"]
        assert detail.tally.total == 2

    async def test_topics(self, gateway, seeded) -> None:
        assert await motion_services.get_motion_topics(gateway) == ["health", "budget", "education"]

    async def test_missing_motion(self, gateway, seeded) -> None:
        with pytest.raises(NotFoundError):
            await motion_services.get_motion_detail(gateway, "missing")

    async def test_duplicate_id_is_a_conflict(self, gateway, seeded) -> None:
        with pytest.raises(DuplicateEntityError) as exc_info:
            await gateway.create_motion(
                {
                    "id": "v1",
                    "title": "Another title",
                    "chamber": Chamber.SENATE,
                    "date": datetime.date(2024, 1, 5),
                    "topics": [],
                    "outcome": MotionOutcome.PASSED,
                }
            )
        assert exc_info.value.entity == "Motion"
        assert await gateway.count(Motion) == 2

    @pytest.mark.parametrize(
        "query",
        [
            MotionQuery(term="REFORM"),
            MotionQuery(term="hospital"),
            MotionQuery(chamber=Chamber.SENATE),
            MotionQuery(date_range=DateRange.THIS_YEAR),
            MotionQuery(date_range=DateRange.LAST_YEAR),
            MotionQuery(date_from=datetime.date(2024, 1, 1)),
            MotionQuery(date_to=datetime.date(2023, 12, 31)),
            MotionQuery(date_to=datetime.date.max),
            MotionQuery(chamber=Chamber.DEPUTIES, term="budget"),
            MotionQuery(chamber=Chamber.SENATE, date_range=DateRange.THIS_YEAR),
        ],
    )
    async def test_database_filter_agrees_with_memory(self, gateway, seeded, query) -> None:
        everything = await gateway.list_motions()
        in_database = await gateway.list_motions(query, TODAY)
        assert [item.id for item in in_database] == [item.id for item in filter_motions(everything, query, today=TODAY)]


class TestDashboard:
    """Tests for the dashboard summary."""

    async def test_summary(self, gateway, seeded) -> None:
        await gateway.create_vote_record(VoteRecordDraft("l1", "v1", Position.FOR))
        summary = await get_dashboard_summary(gateway)
        assert summary.total_legislators == 3
        assert summary.total_motions == 2
        assert summary.total_vote_records == 1
        assert [motion.id for motion in summary.recent_motions] == ["v1", "v2"]
        assert [legislator.id for legislator in summary.legislators_without_records] == ["l2", "l3"]
        # v1 stores zeros but has one record, v2 stores totals but has none
        assert summary.motions_with_tally_gaps == 2
