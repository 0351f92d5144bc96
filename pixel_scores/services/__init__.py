"""Service layer helpers."""

from .scores import (
    ScoreSubmission,
    SubmitOutcome,
    clamp_limit,
    entry_to_dict,
    parse_submission,
    prune_scores,
    submit_score,
    top_scores,
)

__all__ = [
    "ScoreSubmission",
    "SubmitOutcome",
    "clamp_limit",
    "entry_to_dict",
    "parse_submission",
    "prune_scores",
    "submit_score",
    "top_scores",
]
