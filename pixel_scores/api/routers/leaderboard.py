"""Leaderboard endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Request
from sqlmodel import Session

from ...core import get_session
from ...services.scores import (
    clamp_limit,
    entry_to_dict,
    parse_submission,
    submit_score,
    top_scores,
)

router = APIRouter(tags=["leaderboard"])


@router.post("/submit-score")
@router.post("/api/score", include_in_schema=False)
def submit(
    request: Request,
    body: Any = Body(None),
    session: Session = Depends(get_session),
) -> Dict[str, bool]:
    """Store a score and trim the board to its capacity."""

    submission = parse_submission(body)
    submit_score(session, submission, capacity=request.app.state.capacity)
    return {"ok": True}


@router.get("/leaderboard")
@router.get("/api/leaderboard", include_in_schema=False)
def get_leaderboard(
    request: Request,
    limit: Optional[str] = Query(None),
    session: Session = Depends(get_session),
) -> Dict[str, Any]:
    """Get the ranked leaderboard, best score first."""

    state = request.app.state
    size = clamp_limit(limit, state.default_limit, state.max_limit)
    entries = top_scores(session, size)
    return {"ok": True, "data": [entry_to_dict(entry) for entry in entries]}


__all__ = ["router"]
