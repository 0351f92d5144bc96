"""Database model for submitted scores."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Index
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow

BITCOIN_ADDRESS_MAX_LEN = 128
TWITTER_HANDLE_MAX_LEN = 64


class ScoreEntry(SQLModel, table=True):
    """One submitted game result; ``score`` is the ranking key."""

    __tablename__ = "scores"
    # Ids double as the insertion-order tie-break, so SQLite must not reuse them.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = ORMField(default=None, primary_key=True)
    score: int
    engel_score: int = 0
    banana_score: int = 0
    level: Optional[int] = None
    bitcoin_address: Optional[str] = ORMField(default=None, max_length=BITCOIN_ADDRESS_MAX_LEN)
    twitter_handle: Optional[str] = ORMField(default=None, max_length=TWITTER_HANDLE_MAX_LEN)
    created_at: datetime = ORMField(default_factory=utcnow)


Index("idx_scores_score_desc", ScoreEntry.__table__.c.score.desc())


__all__ = ["BITCOIN_ADDRESS_MAX_LEN", "ScoreEntry", "TWITTER_HANDLE_MAX_LEN"]
