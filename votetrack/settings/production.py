# Local application imports
from votetrack.settings.common import CommonSettings


class ProductionSettings(CommonSettings):
    DEBUG_MODE: bool = False
    SQL_ECHO: bool = False
    SENTRY_DSN: str | None = None
