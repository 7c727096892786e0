from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class AdvertiserRecord:
    advertiser_id: int
    date: str  # YYYY-MM-DD
    clicks: int
    impressions: int


@dataclass
class AggregatedEntry:
    date: str
    clicks: int = 0
    impressions: int = 0


@dataclass
class AggregationResult:
    entries: list[AggregatedEntry] = field(default_factory=list)
    record_count: int = 0
    advertiser_count: int = 0
    failed_advertiser_ids: list[int] = field(default_factory=list)

    def get(self, date: str) -> Optional[AggregatedEntry]:
        for entry in self.entries:
            if entry.date == date:
                return entry
        return None

    @property
    def total_clicks(self) -> int:
        return sum(e.clicks for e in self.entries)

    @property
    def total_impressions(self) -> int:
        return sum(e.impressions for e in self.entries)

    def is_empty(self) -> bool:
        return not self.entries
