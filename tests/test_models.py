"""Tests for earnings and notification models."""

from datetime import date

import pytest

from earningsalert.errors import MalformedRecordError
from earningsalert.models.earnings import EarningsEvent, ReportHour
from earningsalert.models.notification import NotificationRecord, NotificationState
from tests.helpers import make_row


class TestReportHour:
    @pytest.mark.parametrize(
        "code, expected",
        [
            ("bmo", ReportHour.BMO),
            ("AMC", ReportHour.AMC),
            ("dmh", ReportHour.DMH),
            ("", ReportHour.UNKNOWN),
            ("later", ReportHour.UNKNOWN),
            (None, ReportHour.UNKNOWN),
        ],
    )
    def test_from_code(self, code, expected):
        assert ReportHour.from_code(code) is expected

    def test_labels(self):
        assert ReportHour.BMO.label == "Before Market Open"
        assert ReportHour.AMC.label == "After Market Close"
        assert ReportHour.DMH.label == "During Market Hours"
        assert ReportHour.UNKNOWN.label == "Unknown"


class TestEarningsEventFromRecord:
    def test_full_row(self):
        event = EarningsEvent.from_record(make_row())
        assert event.symbol == "AAPL"
        assert event.report_date == date(2024, 1, 15)
        assert event.fiscal_quarter == "1"
        assert event.fiscal_year == 2024
        assert event.hour is ReportHour.AMC
        assert event.eps_actual == pytest.approx(1.10)
        assert event.revenue_actual == 2_345_000_000
        assert event.key == ("AAPL", date(2024, 1, 15))

    def test_nulls_preserved(self):
        event = EarningsEvent.from_record(
            make_row(eps_estimate=None, revenue_estimate=None, quarter=None, hour=None)
        )
        assert event.eps_estimate is None
        assert event.revenue_estimate is None
        assert event.fiscal_quarter is None
        assert event.hour is ReportHour.UNKNOWN

    def test_symbol_whitespace_stripped(self):
        assert EarningsEvent.from_record(make_row(symbol=" IBM ")).symbol == "IBM"

    @pytest.mark.parametrize("symbol", [None, "", "   ", 42])
    def test_missing_symbol(self, symbol):
        with pytest.raises(MalformedRecordError, match="missing symbol"):
            EarningsEvent.from_record(make_row(symbol=symbol))

    def test_missing_date(self):
        with pytest.raises(MalformedRecordError, match="report date"):
            EarningsEvent.from_record(make_row(date=None))

    def test_invalid_date(self):
        with pytest.raises(MalformedRecordError, match="invalid report date"):
            EarningsEvent.from_record(make_row(date="15/01/2024"))

    def test_non_numeric_eps(self):
        row = make_row()
        row["epsActual"] = "n/a"
        with pytest.raises(MalformedRecordError, match="epsActual"):
            EarningsEvent.from_record(row)

    def test_not_a_mapping(self):
        with pytest.raises(MalformedRecordError):
            EarningsEvent.from_record(["AAPL", "2024-01-15"])  # type: ignore[arg-type]


class TestReportable:
    def test_eps_only(self):
        assert EarningsEvent.from_record(make_row(revenue_actual=None)).is_reportable

    def test_revenue_only(self):
        assert EarningsEvent.from_record(make_row(eps_actual=None)).is_reportable

    def test_estimates_only(self):
        event = EarningsEvent.from_record(make_row(eps_actual=None, revenue_actual=None))
        assert not event.is_reportable


class TestNotificationState:
    def test_add_rejects_duplicate_key(self):
        state = NotificationState()
        assert state.add(NotificationRecord("AAPL", date(2024, 1, 15)))
        assert not state.add(NotificationRecord("AAPL", date(2024, 1, 15)))
        assert len(state) == 1

    def test_same_symbol_different_date(self):
        state = NotificationState(
            [
                NotificationRecord("AAPL", date(2024, 1, 15)),
                NotificationRecord("AAPL", date(2024, 4, 15)),
            ]
        )
        assert len(state) == 2
        assert state.contains("AAPL", date(2024, 4, 15))
        assert ("AAPL", date(2024, 1, 15)) in state
        assert not state.contains("MSFT", date(2024, 1, 15))

    def test_insertion_order_kept(self):
        state = NotificationState()
        state.add(NotificationRecord("MSFT", date(2024, 1, 17)))
        state.add(NotificationRecord("AAPL", date(2024, 1, 15)))
        assert [r.symbol for r in state] == ["MSFT", "AAPL"]
        assert state.to_list() == [
            {"symbol": "MSFT", "date": "2024-01-17"},
            {"symbol": "AAPL", "date": "2024-01-15"},
        ]

    def test_record_from_dict(self):
        record = NotificationRecord.from_dict({"symbol": "AAPL", "date": "2024-01-15"})
        assert record.key == ("AAPL", date(2024, 1, 15))
