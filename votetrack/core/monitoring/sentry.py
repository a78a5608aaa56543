# Standard library imports
import logging

# Third-party imports
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

# Local application imports
from votetrack.settings import settings


def setup_sentry() -> bool:
    """
    Initialise Sentry with the logging and FastAPI integrations.

    Only active in production with a configured DSN. Returns True when a
    Sentry client is running after the call.
    """
    if settings.ENVIRONMENT != "production" or not settings.SENTRY_DSN:
        return False

    if sentry_sdk.get_client().is_active():
        return True

    sentry_logging = LoggingIntegration(
        level=logging.WARNING,  # Capture warnings and above as breadcrumbs
        event_level=logging.ERROR,  # Send errors as events
    )
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        integrations=[sentry_logging, FastApiIntegration()],
        environment=settings.ENVIRONMENT,
        traces_sample_rate=1.0,  # tweak for performance
    )
    return True
