"""Unit tests for MonthlyAggregator."""

from datetime import datetime, timedelta, timezone

from poktcalc.monitoring.reward_engine.models import MonthKey
from poktcalc.monitoring.reward_engine.services import MonthlyAggregator
from poktcalc.monitoring.reward_engine.services.monthly_aggregator import weekday_index

# 2022-03-06 is a Sunday
SUNDAY = datetime(2022, 3, 6, 12, 0, tzinfo=timezone.utc)


class TestWeekdayIndex:

    def test_sunday_is_zero(self):
        assert weekday_index(SUNDAY) == 0

    def test_saturday_is_six(self):
        assert weekday_index(SUNDAY + timedelta(days=6)) == 6


class TestMonthlyAggregator:
    """Test MonthlyAggregator class."""

    def setup_method(self):
        self.aggregator = MonthlyAggregator()

    def test_groups_by_calendar_month(self, tx_factory, utc_time):
        claims = [
            tx_factory(tx_hash="a", time=utc_time(2022, 2, 28, 23, 59), is_confirmed=True),
            tx_factory(tx_hash="b", time=utc_time(2022, 3, 1, 0, 1), is_confirmed=True),
            tx_factory(tx_hash="c", time=utc_time(2022, 3, 15), is_confirmed=True),
        ]

        months = self.aggregator.aggregate(claims)

        assert set(months) == {MonthKey(2022, 2), MonthKey(2022, 3)}
        assert [tx.hash for tx in months[MonthKey(2022, 3)].transactions] == ["b", "c"]

    def test_timing_uses_adjacent_gaps(self, tx_factory):
        claims = [
            tx_factory(tx_hash="c", time=SUNDAY + timedelta(seconds=180), is_confirmed=True),
            tx_factory(tx_hash="a", time=SUNDAY, is_confirmed=True),
            tx_factory(tx_hash="b", time=SUNDAY + timedelta(seconds=60), is_confirmed=True),
        ]

        month = self.aggregator.aggregate(claims)[MonthKey(2022, 3)]

        assert [tx.hash for tx in month.transactions] == ["a", "b", "c"]
        assert month.total_secs_between_rewards == 180.0
        assert month.avg_secs_between_rewards == 90.0

    def test_single_transaction_has_zero_average(self, tx_factory):
        month = self.aggregator.aggregate([
            tx_factory(time=SUNDAY, is_confirmed=True)
        ])[MonthKey(2022, 3)]

        assert month.avg_secs_between_rewards == 0.0
        assert month.total_secs_between_rewards == 0.0

    def test_unconfirmed_claims_excluded_from_totals(self, tx_factory):
        claims = [
            tx_factory(tx_hash="a", time=SUNDAY, num_relays=100, is_confirmed=True),
            tx_factory(tx_hash="b", time=SUNDAY + timedelta(seconds=30), num_relays=40, is_confirmed=False),
            tx_factory(tx_hash="c", time=SUNDAY + timedelta(seconds=100), num_relays=10, is_confirmed=True),
        ]

        month = self.aggregator.aggregate(claims)[MonthKey(2022, 3)]

        assert month.total_relays == 110
        assert len(month.transactions) == 3
        assert month.days_of_week[0].relays == 110

    def test_timing_includes_unconfirmed_claims(self, tx_factory):
        claims = [
            tx_factory(tx_hash="a", time=SUNDAY, is_confirmed=True),
            tx_factory(tx_hash="b", time=SUNDAY + timedelta(seconds=60), is_confirmed=False),
            tx_factory(tx_hash="c", time=SUNDAY + timedelta(seconds=180), is_confirmed=True),
        ]

        month = self.aggregator.aggregate(claims)[MonthKey(2022, 3)]

        assert month.total_secs_between_rewards == 180.0
        assert month.avg_secs_between_rewards == 90.0

    def test_all_unconfirmed_still_timed(self, tx_factory):
        month = self.aggregator.aggregate([
            tx_factory(tx_hash="a", time=SUNDAY, is_confirmed=False),
            tx_factory(tx_hash="b", time=SUNDAY + timedelta(seconds=40), is_confirmed=False),
        ])[MonthKey(2022, 3)]

        assert month.total_relays == 0
        assert month.avg_secs_between_rewards == 40.0

    def test_weekday_buckets_sum_to_total(self, tx_factory):
        claims = [
            tx_factory(tx_hash=f"tx{day}", time=SUNDAY + timedelta(days=day), num_relays=10 * (day + 1),
                       is_confirmed=day % 3 != 0)
            for day in range(14)
        ]

        months = self.aggregator.aggregate(claims)

        for month in months.values():
            assert sum(d.relays for d in month.days_of_week.values()) == month.total_relays

    def test_weekday_bucket_assignment(self, tx_factory):
        month = self.aggregator.aggregate([
            tx_factory(tx_hash="sun", time=SUNDAY, num_relays=5, is_confirmed=True),
            tx_factory(tx_hash="tue", time=SUNDAY + timedelta(days=2), num_relays=7, is_confirmed=True),
        ])[MonthKey(2022, 3)]

        assert month.days_of_week[0].relays == 5
        assert month.days_of_week[0].name == "Sunday"
        assert month.days_of_week[2].relays == 7
        assert month.days_of_week[2].name == "Tuesday"

    def test_non_utc_times_bucketed_in_utc(self, tx_factory):
        # 2022-03-31 23:30 in UTC-05:00 is April 1st in UTC
        eastern = timezone(timedelta(hours=-5))
        month_keys = set(self.aggregator.aggregate([
            tx_factory(time=datetime(2022, 3, 31, 23, 30, tzinfo=eastern), is_confirmed=True)
        ]))

        assert month_keys == {MonthKey(2022, 4)}

    def test_transactions_without_time_skipped(self, tx_factory):
        assert self.aggregator.aggregate([tx_factory(time=None, is_confirmed=True)]) == {}

    def test_empty_input(self):
        assert self.aggregator.aggregate([]) == {}
