"""External collaborators: price data, notifications, and request pacing.

Re-exports all public service classes so consumers can import directly:
    from Signal_Sentry.services import FinnhubService, DiscordNotifier
"""

from Signal_Sentry.services.finnhub import FinnhubService
from Signal_Sentry.services.notifier import DiscordNotifier, Notifier
from Signal_Sentry.services.rate_limiter import RateLimiter

__all__ = [
    # Infrastructure
    "RateLimiter",
    # Data services
    "FinnhubService",
    # Notifications
    "DiscordNotifier",
    "Notifier",
]
