from dataclasses import dataclass
from typing import Generic, TypeVar

R = TypeVar("R")


@dataclass(frozen=True)
class SubmissionOutcome(Generic[R]):
    """Outcome of saving an assessment result to the hosted database.

    The result is always computed, even if saving it failed, so it can still be shown.
    """

    succeeded: bool
    message: str
    result: R | None = None
    record_id: str | None = None

    @classmethod
    def success(cls, result: R, record_id: str) -> "SubmissionOutcome[R]":
        return cls(succeeded=True, message="Result saved", result=result, record_id=record_id)

    @classmethod
    def failure(cls, message: str, result: R | None = None) -> "SubmissionOutcome[R]":
        return cls(succeeded=False, message=message, result=result)
