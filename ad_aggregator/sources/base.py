from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class FetchOutcome:
    advertiser_id: int
    body: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.body is not None

    @classmethod
    def ok(cls, advertiser_id: int, body: str) -> "FetchOutcome":
        return cls(advertiser_id=advertiser_id, body=body)

    @classmethod
    def failed(cls, advertiser_id: int, error_message: str) -> "FetchOutcome":
        return cls(advertiser_id=advertiser_id, error_message=error_message)


class BaseAdvertiserSource(ABC):
    @abstractmethod
    def fetch(self, advertiser_id: int) -> FetchOutcome:
        """Fetch the raw performance payload for one advertiser.

        Must not raise; returns FetchOutcome with error_message on failure.
        """
