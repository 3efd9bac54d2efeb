"""Tests for period anchors, NAV change and daily snapshots."""

from datetime import date
from decimal import Decimal

from tests.factories import TEST_RATES, make_asset, make_history
from wealthvue.services.portfolio.history import calculate_change, find_period_anchor
from wealthvue.services.portfolio.nav_history_service import NavHistoryService

USD_ONLY = {"USD": Decimal("1")}


class TestFindPeriodAnchor:
    """Test find_period_anchor."""

    def test_one_day_uses_second_to_last(self):
        history = make_history(("2024-01-01", 100), ("2024-01-02", 110))
        assert find_period_anchor(history, "1D").total_nav == Decimal("100")

    def test_unsorted_history_is_ordered_by_date(self):
        history = make_history(("2024-01-03", 120), ("2024-01-01", 100), ("2024-01-02", 110))
        assert find_period_anchor(history, "1D").date == "2024-01-02"
        assert find_period_anchor(history, "All").date == "2024-01-01"

    def test_single_entry_has_no_anchor(self):
        assert find_period_anchor(make_history(("2024-01-01", 100)), "1D") is None
        assert find_period_anchor([], "All") is None

    def test_one_week_picks_latest_on_or_before_target(self):
        history = make_history(
            ("2024-03-01", 100),
            ("2024-03-08", 105),
            ("2024-03-09", 106),
            ("2024-03-15", 110),
        )
        anchor = find_period_anchor(history, "1W", today=date(2024, 3, 15))
        assert anchor.date == "2024-03-08"

    def test_one_month_falls_back_to_oldest(self):
        history = make_history(("2024-03-10", 100), ("2024-03-14", 104), ("2024-03-15", 110))
        anchor = find_period_anchor(history, "1M", today=date(2024, 3, 15))
        assert anchor.date == "2024-03-10"


class TestCalculateChange:
    """Test calculate_change."""

    def test_change_against_converted_anchor(self):
        history = make_history(("2024-01-01", 100), ("2024-01-02", 110))

        result = calculate_change(history, "1D", Decimal("2400"), "ZAR", TEST_RATES)

        assert result.converted_anchor_nav == Decimal("2000")
        assert result.change == Decimal("400")
        assert result.change_percent == Decimal("20")

    def test_degenerate_history_reports_zero(self):
        result = calculate_change(make_history(("2024-01-01", 100)), "1D", Decimal("500"), "USD", USD_ONLY)

        assert result.anchor is None
        assert result.change == 0
        assert result.change_percent == 0

    def test_zero_anchor_gives_finite_percentage(self):
        history = make_history(("2024-01-01", 0), ("2024-01-02", 50))

        result = calculate_change(history, "1D", Decimal("50"), "USD", USD_ONLY)

        assert result.change == Decimal("50")
        assert result.change_percent == Decimal("5000")


class TestNavHistoryService:
    """Test NavHistoryService."""

    def test_records_usd_snapshot_once_per_day(self, db):
        service = NavHistoryService(db)
        assets = [make_asset("Cash", "cash", 1000, currency="ZAR"), make_asset("Stock", "stock", 50)]

        entry, created = service.record_daily_snapshot(assets, TEST_RATES, "ZAR", today=date(2024, 5, 1))
        again, created_again = service.record_daily_snapshot(
            [make_asset("More", "cash", 999999)], TEST_RATES, "ZAR", today=date(2024, 5, 1)
        )

        assert created is True
        assert entry.date == "2024-05-01"
        assert entry.total_nav == Decimal("100")
        assert entry.display_currency == "ZAR"
        assert created_again is False
        assert again.total_nav == Decimal("100")
        assert len(service.list_history()) == 1

    def test_history_sorted_and_reset(self, db):
        service = NavHistoryService(db)
        service.record_daily_snapshot([], USD_ONLY, "USD", today=date(2024, 5, 2))
        service.record_daily_snapshot([], USD_ONLY, "USD", today=date(2024, 5, 1))

        assert [e.date for e in service.list_history()] == ["2024-05-01", "2024-05-02"]
        assert service.reset() == 2
        assert service.list_history() == []
