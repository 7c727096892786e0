import random

from ad_aggregator.aggregator import aggregate
from ad_aggregator.models import AdvertiserRecord, AggregatedEntry

RECORDS = [
    AdvertiserRecord(advertiser_id=1, date="2016-06-02", clicks=1, impressions=4),
    AdvertiserRecord(advertiser_id=1, date="2016-06-01", clicks=3, impressions=10),
    AdvertiserRecord(advertiser_id=2, date="2016-06-01", clicks=2, impressions=5),
    AdvertiserRecord(advertiser_id=3, date="2016-06-03", clicks=0, impressions=9),
    AdvertiserRecord(advertiser_id=3, date="2016-06-02", clicks=6, impressions=1),
]


def _totals(result):
    return {e.date: (e.clicks, e.impressions) for e in result.entries}


def test_same_date_across_advertisers_is_summed():
    result = aggregate([
        AdvertiserRecord(advertiser_id=1, date="2016-06-01", clicks=3, impressions=10),
        AdvertiserRecord(advertiser_id=2, date="2016-06-01", clicks=2, impressions=5),
    ])

    assert result.entries == [AggregatedEntry(date="2016-06-01", clicks=5, impressions=15)]
    assert result.record_count == 2


def test_sorted_by_date_by_default():
    result = aggregate(RECORDS)

    assert [e.date for e in result.entries] == ["2016-06-01", "2016-06-02", "2016-06-03"]
    assert result.total_clicks == 12
    assert result.total_impressions == 29


def test_unsorted_keeps_first_seen_order():
    result = aggregate(RECORDS, sort_by_date=False)

    assert [e.date for e in result.entries] == ["2016-06-02", "2016-06-01", "2016-06-03"]


def test_totals_independent_of_record_order():
    expected = _totals(aggregate(RECORDS))
    rng = random.Random(42)

    for _ in range(10):
        shuffled = RECORDS[:]
        rng.shuffle(shuffled)
        assert _totals(aggregate(shuffled)) == expected


def test_aggregate_is_idempotent():
    assert aggregate(RECORDS) == aggregate(RECORDS)


def test_aggregate_does_not_mutate_between_calls():
    first = aggregate(RECORDS)
    aggregate(RECORDS)

    assert first.get("2016-06-01") == AggregatedEntry(date="2016-06-01", clicks=5, impressions=15)


def test_aggregate_empty():
    result = aggregate([])

    assert result.is_empty()
    assert result.record_count == 0
    assert result.get("2016-06-01") is None
