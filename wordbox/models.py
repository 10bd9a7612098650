"""
SQLAlchemy ORM Models for the Word Store

One table: words. Each row is a card and its current Leitner state.
"""

from sqlalchemy import Column, Date, Integer, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Word(Base):
    """
    Persistent state of a single card.

    id is assigned by SQLite (integer primary key) and is never reused
    while the row exists.
    """
    __tablename__ = 'words'

    id = Column(Integer, primary_key=True)

    # Word pair (immutable after creation)
    front = Column(Text, nullable=False)
    back = Column(Text, nullable=False)

    # Leitner state (always written together)
    box = Column(Integer, nullable=False, default=0)
    due = Column(Date, nullable=False)

    def __repr__(self):
        return f"<Word(id={self.id}, box={self.box}, due={self.due})>"
