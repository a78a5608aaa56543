# Standard library imports
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
import datetime
from typing import Any, TypeVar

# Third-party imports
from sqlalchemy import Select, and_, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from votetrack.core.exceptions import (
    DuplicateEntityError,
    DuplicateVoteRecordError,
    NotFoundError,
    PersistenceError,
    ReferentialError,
)
from votetrack.core.monitoring.logging import get_logger
from votetrack.gateway.protocol import VoteRecordDraft
from votetrack.models.base import Base
from votetrack.models.parliament.enums import Position
from votetrack.models.parliament.legislator import Legislator
from votetrack.models.parliament.motion import Motion
from votetrack.models.parliament.vote_record import VoteRecord
from votetrack.schemas.parliament.query_schemas import LegislatorQuery, MotionQuery
from votetrack.services.query_services import legislator_clauses, motion_clauses, motion_matches_topic

logger = get_logger("gateway")

ModelT = TypeVar("ModelT", bound=Base)

GENERIC_STORAGE_MESSAGE = "The data store is unavailable. Please try again later."


class SQLAlchemyGateway:
    """
    Persistence gateway over one async SQLAlchemy session.

    Every write commits immediately; a failed commit is rolled back before the
    error is translated, so the session stays usable for the next call.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # ---- helpers ----

    @asynccontextmanager
    async def _storage_errors(self, action: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Storage failure while trying to {action}: {e}")
            raise PersistenceError(message=GENERIC_STORAGE_MESSAGE, detail=str(e)) from e

    async def _scalars(self, statement: Select[tuple[ModelT]], action: str) -> list[ModelT]:
        async with self._storage_errors(action):
            result = await self.session.execute(statement)
            return list(result.scalars().all())

    async def _get(self, model: type[ModelT], entity_id: str) -> ModelT | None:
        async with self._storage_errors(f"load {model.__name__} {entity_id}"):
            return await self.session.get(model, entity_id)

    async def _get_or_raise(self, model: type[ModelT], entity_id: str) -> ModelT:
        instance = await self._get(model, entity_id)
        if instance is None:
            raise NotFoundError(message=f"{model.__name__} not found", entity=model.__name__, entity_id=entity_id)
        return instance

    async def _save(self, instance: ModelT, action: str) -> ModelT:
        async with self._storage_errors(action):
            self.session.add(instance)
            await self.session.commit()
            await self.session.refresh(instance)
        return instance

    async def _raise_if_taken(self, model: type[ModelT], entity_id: str | None, cause: Exception | None = None) -> None:
        if entity_id is None or await self._get(model, entity_id) is None:
            return
        logger.warning(f"Rejected duplicate {model.__name__} id {entity_id}")
        raise DuplicateEntityError(
            message=f"{model.__name__} already exists", entity=model.__name__, entity_id=entity_id
        ) from cause

    async def _create(self, instance: ModelT) -> ModelT:
        model = type(instance)
        entity_id = instance.id
        # An id already in the identity map would only surface as a flush warning
        await self._raise_if_taken(model, entity_id)
        try:
            self.session.add(instance)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            await self._raise_if_taken(model, entity_id, e)
            logger.error(f"Storage rejected new {model.__name__}: {e}")
            raise PersistenceError(message=f"The {model.__name__.lower()} could not be saved.", detail=str(e)) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Storage failure while creating {model.__name__}: {e}")
            raise PersistenceError(message=GENERIC_STORAGE_MESSAGE, detail=str(e)) from e

        async with self._storage_errors(f"reload {model.__name__}"):
            await self.session.refresh(instance)
        return instance

    async def _apply_changes(self, model: type[ModelT], entity_id: str, changes: dict[str, Any]) -> ModelT:
        instance = await self._get_or_raise(model, entity_id)
        for field, value in changes.items():
            setattr(instance, field, value)
        return await self._save(instance, f"update {model.__name__} {entity_id}")

    async def _delete_referenced(self, model: type[Legislator] | type[Motion], entity_id: str) -> None:
        instance = await self._get_or_raise(model, entity_id)
        try:
            await self.session.delete(instance)
            await self.session.commit()
        except IntegrityError as e:
            # RESTRICT foreign key on vote_records
            await self.session.rollback()
            logger.warning(f"Delete of {model.__name__} {entity_id} blocked by vote records")
            raise ReferentialError(
                message="Delete blocked by dependent vote records", entity=model.__name__, entity_id=entity_id
            ) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Storage failure while deleting {model.__name__} {entity_id}: {e}")
            raise PersistenceError(message=GENERIC_STORAGE_MESSAGE, detail=str(e)) from e

    @staticmethod
    def _without_empty_id(data: dict[str, Any]) -> dict[str, Any]:
        return {key: value for key, value in data.items() if not (key == "id" and value is None)}

    # ---- legislators ----

    async def list_legislators(self, query: LegislatorQuery | None = None) -> list[Legislator]:
        statement = select(Legislator)
        if query is not None:
            statement = statement.where(*legislator_clauses(query))
        # SQLite lower() folds ASCII only; non-ASCII names may order differently than in memory
        statement = statement.order_by(func.lower(Legislator.name).asc(), Legislator.id.asc())
        return await self._scalars(statement, "list legislators")

    async def get_legislator(self, legislator_id: str) -> Legislator | None:
        return await self._get(Legislator, legislator_id)

    async def create_legislator(self, data: dict[str, Any]) -> Legislator:
        legislator = Legislator(**self._without_empty_id(data))
        return await self._create(legislator)

    async def update_legislator(self, legislator_id: str, changes: dict[str, Any]) -> Legislator:
        return await self._apply_changes(Legislator, legislator_id, changes)

    async def delete_legislator(self, legislator_id: str) -> None:
        await self._delete_referenced(Legislator, legislator_id)

    # ---- motions ----

    async def list_motions(self, query: MotionQuery | None = None, today: datetime.date | None = None) -> list[Motion]:
        statement = select(Motion)
        if query is not None:
            statement = statement.where(*motion_clauses(query, today))
        statement = statement.order_by(Motion.date.desc(), Motion.id.asc())
        motions = await self._scalars(statement, "list motions")
        if query is not None and query.topic is not None:
            motions = [motion for motion in motions if motion_matches_topic(motion, query)]
        return motions

    async def get_motion(self, motion_id: str) -> Motion | None:
        return await self._get(Motion, motion_id)

    async def create_motion(self, data: dict[str, Any]) -> Motion:
        motion = Motion(**self._without_empty_id(data))
        return await self._create(motion)

    async def update_motion(self, motion_id: str, changes: dict[str, Any]) -> Motion:
        return await self._apply_changes(Motion, motion_id, changes)

    async def delete_motion(self, motion_id: str) -> None:
        await self._delete_referenced(Motion, motion_id)

    # ---- vote records ----

    async def list_vote_records(
        self, legislator_id: str | None = None, motion_id: str | None = None
    ) -> list[VoteRecord]:
        filters = []
        if legislator_id is not None:
            filters.append(VoteRecord.legislator_id == legislator_id)
        if motion_id is not None:
            filters.append(VoteRecord.motion_id == motion_id)

        statement = select(VoteRecord).join(VoteRecord.motion)
        if filters:
            statement = statement.where(and_(*filters))
        statement = statement.order_by(Motion.date.desc(), VoteRecord.id.asc())
        return await self._scalars(statement, "list vote records")

    async def get_vote_record(self, vote_record_id: str) -> VoteRecord | None:
        return await self._get(VoteRecord, vote_record_id)

    async def find_vote_record(self, legislator_id: str, motion_id: str) -> VoteRecord | None:
        records = await self.list_vote_records(legislator_id=legislator_id, motion_id=motion_id)
        return records[0] if records else None

    async def create_vote_record(self, draft: VoteRecordDraft) -> VoteRecord:
        record = VoteRecord(legislator_id=draft.legislator_id, motion_id=draft.motion_id, position=draft.position)
        try:
            self.session.add(record)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            # Another writer may have stored the pair after the pre-check
            existing = await self.find_vote_record(draft.legislator_id, draft.motion_id)
            if existing is not None:
                logger.warning(f"Storage rejected duplicate vote record {draft.legislator_id}/{draft.motion_id}")
                raise DuplicateVoteRecordError(
                    message="Duplicate vote record",
                    legislator_id=draft.legislator_id,
                    motion_id=draft.motion_id,
                    vote_record_id=existing.id,
                ) from e
            logger.error(f"Storage rejected vote record {draft.legislator_id}/{draft.motion_id}: {e}")
            raise PersistenceError(message="The vote record could not be saved.", detail=str(e)) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Storage failure while creating vote record: {e}")
            raise PersistenceError(message=GENERIC_STORAGE_MESSAGE, detail=str(e)) from e

        async with self._storage_errors("reload vote record"):
            await self.session.refresh(record)
        return record

    async def create_vote_records_batch(self, drafts: Sequence[VoteRecordDraft]) -> int:
        """Insert every draft in one transaction: all rows are stored or none are."""
        records = [
            VoteRecord(legislator_id=draft.legislator_id, motion_id=draft.motion_id, position=draft.position)
            for draft in drafts
        ]
        try:
            self.session.add_all(records)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Batch insert of {len(records)} vote records failed: {e}")
            raise PersistenceError(
                message="Failed to import vote records. Make sure the referenced legislators and motions exist "
                "and that the records don't already exist.",
                detail=str(e),
            ) from e
        return len(records)

    async def update_vote_record(self, vote_record_id: str, position: Position) -> VoteRecord:
        return await self._apply_changes(VoteRecord, vote_record_id, {"position": position})

    async def delete_vote_record(self, vote_record_id: str) -> None:
        record = await self._get_or_raise(VoteRecord, vote_record_id)
        async with self._storage_errors(f"delete vote record {vote_record_id}"):
            await self.session.delete(record)
            await self.session.commit()

    # ---- counts ----

    async def count(self, model: type[Legislator] | type[Motion] | type[VoteRecord]) -> int:
        async with self._storage_errors(f"count {model.__tablename__}"):
            result = await self.session.execute(select(func.count()).select_from(model))
            return int(result.scalar_one())
