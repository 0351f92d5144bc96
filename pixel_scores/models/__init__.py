"""Database model exports."""

from .score import BITCOIN_ADDRESS_MAX_LEN, TWITTER_HANDLE_MAX_LEN, ScoreEntry

__all__ = [
    "BITCOIN_ADDRESS_MAX_LEN",
    "ScoreEntry",
    "TWITTER_HANDLE_MAX_LEN",
]
