"""Score submission, top-N retention and ranked reads."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..core.errors import InvalidInput, StorageError
from ..core.time import isoformat_utc
from ..models import BITCOIN_ADDRESS_MAX_LEN, TWITTER_HANDLE_MAX_LEN, ScoreEntry

logger = logging.getLogger(__name__)

# Sub-score component -> request/response field name.
SUB_SCORE_FIELDS: Dict[str, str] = {
    "engel": "engelScore",
    "banana": "bananaScore",
}

# Upper bound of the INTEGER columns.
MAX_SCORE = 2**31 - 1

_LEADING_INT = re.compile(r"^\s*([+-]?)(\d+)")
# Longer digit runs are out of range for any limit and skip int() parsing.
_MAX_LIMIT_DIGITS = 9


@dataclass
class ScoreSubmission:
    """Validated submission; sub-scores are already clamped integers."""

    sub_scores: Dict[str, int]
    level: Optional[int] = None
    bitcoin_address: Optional[str] = None
    twitter_handle: Optional[str] = None

    @property
    def total_score(self) -> int:
        return sum(self.sub_scores.values())


@dataclass
class SubmitOutcome:
    entry_id: int
    total_score: int
    retained: bool
    pruned: int = 0


def _coerce_number(value: Any, name: str) -> float:
    """Coerce a JSON value to a finite number or raise ``InvalidInput``."""

    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be a number")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise InvalidInput(f"{name} must be a number") from None
    else:
        raise InvalidInput(f"{name} must be a number")

    if not math.isfinite(number):
        raise InvalidInput(f"{name} must be a finite number")
    return number


def _coerce_sub_score(value: Any, name: str) -> int:
    # Negative sub-scores are clamped rather than rejected.
    score = max(int(_coerce_number(value, name)), 0)
    if score > MAX_SCORE:
        raise InvalidInput(f"{name} is out of range")
    return score


def _coerce_level(value: Any) -> Optional[int]:
    if value is None:
        return None
    level = int(_coerce_number(value, "level"))
    if abs(level) > MAX_SCORE:
        raise InvalidInput("level is out of range")
    return level


def _clean_identity(value: Any, max_len: int) -> Optional[str]:
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned[:max_len] or None


def parse_submission(body: Any) -> ScoreSubmission:
    """Validate a decoded JSON body and build a ``ScoreSubmission``."""

    if not isinstance(body, dict):
        raise InvalidInput("request body must be a JSON object")

    provided = [
        name for name, key in SUB_SCORE_FIELDS.items() if body.get(key) is not None
    ]
    if not provided:
        fields = "/".join(SUB_SCORE_FIELDS.values())
        raise InvalidInput(f"at least one of {fields} is required")

    sub_scores = {
        name: _coerce_sub_score(body[key], key) if name in provided else 0
        for name, key in SUB_SCORE_FIELDS.items()
    }
    submission = ScoreSubmission(
        sub_scores=sub_scores,
        level=_coerce_level(body.get("level")),
        bitcoin_address=_clean_identity(body.get("bitcoinAddress"), BITCOIN_ADDRESS_MAX_LEN),
        twitter_handle=_clean_identity(body.get("twitterHandle"), TWITTER_HANDLE_MAX_LEN),
    )
    if submission.total_score > MAX_SCORE:
        raise InvalidInput("total score is out of range")
    return submission


def _lock_scores(session: Session) -> None:
    """Serialize insert-and-prune on engines that allow concurrent writers."""

    if session.get_bind().dialect.name == "postgresql":
        session.execute(
            text(f"LOCK TABLE {ScoreEntry.__tablename__} IN SHARE ROW EXCLUSIVE MODE")
        )


def prune_scores(session: Session, capacity: int) -> int:
    """Delete every entry ranked below ``capacity``; the caller commits."""

    overflow = (
        select(ScoreEntry.id)
        .order_by(ScoreEntry.score.desc(), ScoreEntry.id.asc())
        .offset(capacity)
    )
    result = session.execute(
        delete(ScoreEntry)
        .where(ScoreEntry.id.in_(overflow))
        .execution_options(synchronize_session=False)
    )
    return result.rowcount or 0


def submit_score(
    session: Session, submission: ScoreSubmission, *, capacity: int
) -> SubmitOutcome:
    """Insert a submission and trim the table to ``capacity`` in one transaction."""

    try:
        _lock_scores(session)
        entry = ScoreEntry(
            score=submission.total_score,
            engel_score=submission.sub_scores.get("engel", 0),
            banana_score=submission.sub_scores.get("banana", 0),
            level=submission.level,
            bitcoin_address=submission.bitcoin_address,
            twitter_handle=submission.twitter_handle,
        )
        session.add(entry)
        session.flush()
        entry_id = entry.id

        pruned = prune_scores(session, capacity)
        retained = (
            session.exec(select(ScoreEntry.id).where(ScoreEntry.id == entry_id)).first()
            is not None
        )
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("failed to store score submission")
        raise StorageError("failed to store score") from exc

    if pruned:
        logger.info("pruned %d entries beyond capacity %d", pruned, capacity)
    logger.debug(
        "stored entry %s with total %d (retained=%s)",
        entry_id,
        submission.total_score,
        retained,
    )
    return SubmitOutcome(
        entry_id=entry_id,
        total_score=submission.total_score,
        retained=retained,
        pruned=pruned,
    )


def top_scores(session: Session, limit: int) -> List[ScoreEntry]:
    """Return up to ``limit`` entries, best first, earliest first on ties."""

    try:
        entries = session.exec(
            select(ScoreEntry)
            .order_by(ScoreEntry.score.desc(), ScoreEntry.id.asc())
            .limit(limit)
        ).all()
    except SQLAlchemyError as exc:
        logger.exception("failed to read leaderboard")
        raise StorageError("failed to read leaderboard") from exc
    return list(entries)


def clamp_limit(raw: Optional[str], default: int, maximum: int) -> int:
    """Parse a ``limit`` query value and clamp it to ``[1, maximum]``."""

    value = default
    if raw is not None:
        match = _LEADING_INT.match(raw)
        if match:
            sign, digits = match.groups()
            digits = digits.lstrip("0") or "0"
            if len(digits) > _MAX_LIMIT_DIGITS:
                value = 1 if sign == "-" else maximum
            else:
                value = int(sign + digits)
    return min(max(value, 1), maximum)


def entry_to_dict(entry: ScoreEntry) -> Dict[str, Any]:
    """Serialise a score entry to the API's camelCase shape."""

    return {
        "totalScore": entry.score,
        "engelScore": entry.engel_score,
        "bananaScore": entry.banana_score,
        "level": entry.level,
        "bitcoinAddress": entry.bitcoin_address,
        "twitterHandle": entry.twitter_handle,
        "createdAt": isoformat_utc(entry.created_at) if entry.created_at else None,
    }


__all__ = [
    "MAX_SCORE",
    "SUB_SCORE_FIELDS",
    "ScoreSubmission",
    "SubmitOutcome",
    "clamp_limit",
    "entry_to_dict",
    "parse_submission",
    "prune_scores",
    "submit_score",
    "top_scores",
]
