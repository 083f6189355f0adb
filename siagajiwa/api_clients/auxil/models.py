from dataclasses import dataclass

from siagajiwa.data_structures.enums import LoggingLevel


@dataclass(frozen=True)
class NotificationParams:
    message: str
    logging_level: LoggingLevel = LoggingLevel.INFO


NotificationParamsForStatusCode = dict[int, NotificationParams]
