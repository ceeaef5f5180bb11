from datetime import date, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from liftlog.settings import get_settings


def get_app_timezone() -> ZoneInfo:
    try:
        return ZoneInfo(get_settings().APP_TIMEZONE)
    except ZoneInfoNotFoundError:
        return ZoneInfo("UTC")


def local_today() -> date:
    return datetime.now(get_app_timezone()).date()
