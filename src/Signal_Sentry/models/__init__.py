"""Pydantic v2 models and type definitions.

Re-exports all public models so consumers can import directly:
    from Signal_Sentry.models import IndicatorSet, ScanRun, AlertMessage
"""

from Signal_Sentry.models.alert import ALERT_COLOR, AlertMessage
from Signal_Sentry.models.scan import ScanRun
from Signal_Sentry.models.signals import IndicatorSet

__all__ = [
    # Indicators
    "IndicatorSet",
    # Notifications
    "ALERT_COLOR",
    "AlertMessage",
    # Scan
    "ScanRun",
]
