"""
app/repositories/record_store.py

Persistence gateway for imported records.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

from sqlalchemy import insert
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError, StatementError
from sqlalchemy.orm import Session

from app.domain.record_import import NormalizedRecord
from app.mappers.entity_field_mappings import ENTITY_FIELD_MAPPINGS
from db.base import Base
from db.models import Contact, Expense, Order, OrderItem, Quote, Recipe, Supply

logger = logging.getLogger(__name__)

_MODELS_BY_TABLE: Mapping[str, type[Base]] = {
    model.__tablename__: model
    for model in (Order, OrderItem, Expense, Supply, Contact, Recipe, Quote)
}

ENTITY_MODELS: Mapping[str, type[Base]] = {
    mapping.entity_type: _MODELS_BY_TABLE[mapping.table_name]
    for mapping in ENTITY_FIELD_MAPPINGS.values()
}


class RecordInsertError(RuntimeError):
    """Raised when the store refuses one record (constraint, type, or statement error)."""


class RecordStoreUnavailableError(RuntimeError):
    """Raised when the store itself cannot be reached or the connection is lost."""


class RecordStore(Protocol):
    """
    Transactional sink for normalized records.

    ``insert`` must leave the enclosing batch usable when it raises
    RecordInsertError, so later rows can still be stored.
    """

    def begin(self) -> None: ...

    def insert(self, entity_type: str, record: NormalizedRecord, actor_id: int) -> int: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


class SQLAlchemyRecordStore:
    """
    RecordStore backed by a SQLAlchemy session.

    Each insert runs inside its own SAVEPOINT so a refused row is rolled back
    alone and the outer batch transaction stays open.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def begin(self) -> None:
        if self._session.in_transaction():
            return
        try:
            self._session.begin()
            self._session.connection()
        except DBAPIError as exc:
            raise RecordStoreUnavailableError(_describe(exc)) from exc

    def insert(self, entity_type: str, record: NormalizedRecord, actor_id: int) -> int:
        model = ENTITY_MODELS.get(entity_type)
        if model is None:
            raise RecordInsertError(f"No storage table for entity type: {entity_type}")

        stmt = (
            insert(model)
            .values(**dict(record.values), user_id=actor_id)
            .returning(model.id)
        )
        try:
            with self._session.begin_nested():
                return int(self._session.execute(stmt).scalar_one())
        except (OperationalError, InterfaceError) as exc:
            raise RecordStoreUnavailableError(_describe(exc)) from exc
        except DBAPIError as exc:
            if exc.connection_invalidated:
                raise RecordStoreUnavailableError(_describe(exc)) from exc
            raise RecordInsertError(_describe(exc)) from exc
        except StatementError as exc:
            raise RecordInsertError(_describe(exc)) from exc

    def commit(self) -> None:
        try:
            self._session.commit()
        except DBAPIError as exc:
            raise RecordStoreUnavailableError(_describe(exc)) from exc

    def rollback(self) -> None:
        try:
            self._session.rollback()
        except DBAPIError:
            logger.exception("Rollback failed for record import batch")


def _describe(exc: StatementError) -> str:
    source = getattr(exc, "orig", None) or exc
    text = str(source).strip()
    if not text:
        return type(source).__name__
    return text.splitlines()[0]
