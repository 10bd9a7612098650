"""
Database - Word Store I/O Operations

Handles all database operations for cards.
Uses SQLAlchemy ORM with a SQLite file backend.

This module handles ONLY database I/O.
Scheduling rules are handled by the scheduler module.

One WordStore is opened per command and closed when the command ends:

    with WordStore.open("words.db") as store:
        card = store.next_due(store.today())
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional, Union

from sqlalchemy import create_engine, func, inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from wordbox import scheduler
from wordbox.card import Card
from wordbox.config import IMMEDIATE_POLICY, SchedulePolicy
from wordbox.models import Base, Word


class StoreError(Exception):
    """The store could not be opened, created, read or written."""


def get_database_url(path: Union[str, Path]) -> str:
    """SQLAlchemy URL for a SQLite file."""
    return f"sqlite:///{Path(path)}"


def _to_card(row: Word) -> Card:
    return Card(id=row.id, front=row.front, back=row.back, box=row.box, due=row.due)


class WordStore:
    """
    Handle on an open word database.

    Args:
        engine: SQLAlchemy engine bound to the database file
        policy: Scheduling policy (used for the due date of new cards)
        today: Fixed date for the store clock; None uses SQLite's local date
    """

    def __init__(
        self,
        engine: Engine,
        policy: SchedulePolicy = IMMEDIATE_POLICY,
        today: Optional[date] = None
    ):
        self.engine = engine
        self.policy = policy
        self._today = today
        self._sessions = sessionmaker(bind=engine, expire_on_commit=False)

    # ---- Lifecycle ----

    @classmethod
    def open(
        cls,
        path: Union[str, Path],
        policy: SchedulePolicy = IMMEDIATE_POLICY,
        today: Optional[date] = None
    ) -> "WordStore":
        """
        Open an existing database.

        Raises:
            StoreError: If the file does not exist or has no words table
        """
        if not Path(path).exists():
            raise StoreError(f"no such database: {path}")

        store = cls(create_engine(get_database_url(path)), policy=policy, today=today)
        try:
            initialized = inspect(store.engine).has_table(Word.__tablename__)
        except SQLAlchemyError as e:
            store.close()
            raise StoreError(f"cannot open {path}: {e}") from e

        if not initialized:
            store.close()
            raise StoreError(f"not a word database (no {Word.__tablename__} table): {path}")
        return store

    @classmethod
    def create(
        cls,
        path: Union[str, Path],
        policy: SchedulePolicy = IMMEDIATE_POLICY,
        today: Optional[date] = None
    ) -> "WordStore":
        """
        Create the schema in a new (or empty) database file.

        Raises:
            StoreError: If the words table already exists
        """
        store = cls(create_engine(get_database_url(path)), policy=policy, today=today)
        try:
            exists = inspect(store.engine).has_table(Word.__tablename__)
            if not exists:
                Base.metadata.create_all(store.engine)
        except SQLAlchemyError as e:
            store.close()
            raise StoreError(f"cannot create {path}: {e}") from e

        if exists:
            store.close()
            raise StoreError(f"table {Word.__tablename__} already exists in {path}")
        return store

    def close(self):
        """Release all connections."""
        self.engine.dispose()

    def __enter__(self) -> "WordStore":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def _session(self) -> Session:
        return self._sessions()

    # ---- Clock ----

    def today(self) -> date:
        """
        Today's date according to the store.

        Uses SQLite's date('now', 'localtime') unless a fixed date was given.
        Callers should fetch this once per review and reuse it for both the
        due query and the new due date.
        """
        if self._today is not None:
            return self._today

        try:
            with self.engine.connect() as conn:
                value = conn.execute(select(func.date('now', 'localtime'))).scalar_one()
        except SQLAlchemyError as e:
            raise StoreError(f"cannot read store clock: {e}") from e
        return date.fromisoformat(value)

    # ---- Writes ----

    def add(self, front: str, back: str) -> Card:
        """
        Add a new card in box 0.

        The first due date is today plus the policy's creation offset.
        """
        due = scheduler.first_due(self.today(), self.policy)
        return self.insert(front, back, 0, due)

    def insert(self, front: str, back: str, box: int, due: date) -> Card:
        """Insert a card with exact values (used by import)."""
        session = self._session()
        try:
            row = Word(front=front, back=back, box=box, due=due)
            session.add(row)
            session.commit()
            return _to_card(row)
        except SQLAlchemyError as e:
            session.rollback()
            raise StoreError(f"cannot insert word: {e}") from e
        finally:
            session.close()

    def update(self, card_id: int, box: int, due: date) -> None:
        """
        Move a card to a new box and due date in one write.

        Raises:
            StoreError: If the card does not exist or the write fails
        """
        session = self._session()
        try:
            row = session.get(Word, card_id)
            if row is None:
                raise StoreError(f"no word with id {card_id}")
            row.box = box
            row.due = due
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StoreError(f"cannot update word {card_id}: {e}") from e
        finally:
            session.close()

    # ---- Queries ----

    def next_due(self, today: date) -> Optional[Card]:
        """
        Get the next card to review.

        Lowest id among cards with due <= today.

        Returns:
            Card, or None when nothing is due
        """
        session = self._session()
        try:
            row = session.scalars(
                select(Word)
                .where(Word.due <= today)
                .order_by(Word.id)
                .limit(1)
            ).first()
        except SQLAlchemyError as e:
            raise StoreError(f"cannot query due words: {e}") from e
        finally:
            session.close()

        return _to_card(row) if row is not None else None

    def all_cards(self) -> list[Card]:
        """
        Get every card, ordered by id (creation order).

        Returns:
            List of Card
        """
        session = self._session()
        try:
            rows = session.scalars(select(Word).order_by(Word.id)).all()
            return [_to_card(row) for row in rows]
        except SQLAlchemyError as e:
            raise StoreError(f"cannot read words: {e}") from e
        finally:
            session.close()

    def count(self) -> int:
        """Number of cards in the store."""
        session = self._session()
        try:
            return session.scalar(select(func.count()).select_from(Word))
        except SQLAlchemyError as e:
            raise StoreError(f"cannot count words: {e}") from e
        finally:
            session.close()
