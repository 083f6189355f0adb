import logging

from siagajiwa.auxil.constants import CALLER_LOGGING_STACK_LEVEL
from siagajiwa.data_structures.enums import LoggingLevel

logger = logging.getLogger(__name__)


def logs(
    text: str,
    level: LoggingLevel = LoggingLevel.INFO,
    stacklevel: int = CALLER_LOGGING_STACK_LEVEL,
    user_id: str | None = None,
) -> None:
    """Sends message to logger.

    If ``user_id`` is provided, prefixes the message with it.

    By default, shows calling function's name (due to default stack level).
    """
    extra_info = f"User {user_id}: " if user_id else ""
    getattr(logger, level)(f"{extra_info}{text}", stacklevel=stacklevel)
