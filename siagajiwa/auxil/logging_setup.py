import logging

from siagajiwa.auxil.constants import LOGGING_LEVEL


def configure_logging(level: str = LOGGING_LEVEL) -> None:
    """Configures the root logger for applications that embed this package."""
    logging.basicConfig(
        format="%(asctime)s - %(levelname)s - %(message)s | %(module)s (%(funcName)s:%(lineno)s)",
        level=getattr(logging, level.upper()),
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
