# Local application imports
from votetrack.settings.common import CommonSettings


class DevSettings(CommonSettings):
    DEBUG_MODE: bool = True
    CREATE_TABLES_ON_STARTUP: bool = True
