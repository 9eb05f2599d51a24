"""Signal analysis and scoring engine.

Re-exports all public functions so consumers can import directly:
    from Signal_Sentry.analysis import compute_indicators, signal_score
"""

from Signal_Sentry.analysis.scoring import (
    MAX_SCORE,
    combined_score,
    round_score,
    score,
    signal_score,
)
from Signal_Sentry.analysis.sentiment import NeutralSentiment, SentimentSource
from Signal_Sentry.analysis.signals import compute_indicators

__all__ = [
    # Indicators
    "compute_indicators",
    # Scoring
    "MAX_SCORE",
    "combined_score",
    "round_score",
    "score",
    "signal_score",
    # Sentiment
    "NeutralSentiment",
    "SentimentSource",
]
