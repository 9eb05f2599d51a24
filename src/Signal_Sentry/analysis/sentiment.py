"""Sentiment addend for the combined score.

The combined score is ``signal + sentiment``. Only a neutral source exists
today; anything implementing :class:`SentimentSource` can be passed to the
scanner to contribute a non-zero addend without touching the scoring rules.
"""

from typing import Protocol

NEUTRAL_SENTIMENT: float = 0.0


class SentimentSource(Protocol):
    """Provides a per-symbol score added to the technical signal score."""

    async def sentiment(self, symbol: str) -> float: ...


class NeutralSentiment:
    """Sentiment source that never moves the combined score."""

    async def sentiment(self, symbol: str) -> float:
        return NEUTRAL_SENTIMENT
