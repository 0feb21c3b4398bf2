from copy import deepcopy
from datetime import datetime

import pytest

from src.payroll_system.payroll_system.ledger.aggregator import bucket_label, summarize, summarize_history
from src.payroll_system.payroll_system.ledger.model import LedgerFilter


def test_empty_ledger_degrades_to_zeros(fixed_now):
    summary = summarize([], now=fixed_now)

    assert summary.total_paid == 0
    assert summary.average_salary == 0
    assert summary.processed_slips == 0
    assert summary.per_department_total == {}
    assert set(summary.salary_histogram.values()) == {0}
    assert len(summary.monthly_trend) == 12
    assert all(p.total == 0 for p in summary.monthly_trend)


def test_empty_ledger_with_six_month_window(fixed_now):
    summary = summarize([], window_months=6, now=fixed_now)

    assert len(summary.monthly_trend) == 6


def test_single_department_total_matches_total_paid(make_record, fixed_now):
    records = [make_record(1200.5), make_record(800.25, employee_id="EMP-002"), make_record(3000, month="2026-01")]

    summary = summarize(records, now=fixed_now)

    assert list(summary.per_department_total) == ["Engineering"]
    assert summary.per_department_total["Engineering"] == summary.total_paid
    assert summary.total_paid == pytest.approx(5000.75)
    assert summary.average_salary == pytest.approx(5000.75 / 3)
    assert summary.total_employees == 2


def test_department_totals_are_sorted_and_missing_department_is_unassigned(make_record, fixed_now):
    records = [
        make_record(100, department="Sales"),
        make_record(200, department=None),
        make_record(300, department="Admin"),
        make_record(400, department="Sales", employee_id="EMP-002"),
    ]

    summary = summarize(records, now=fixed_now)

    assert list(summary.per_department_total.items()) == [("Admin", 300), ("Sales", 500), ("Unassigned", 200)]


@pytest.mark.parametrize(
    "net, bucket",
    [
        (-50, "0-1000"),
        (0, "0-1000"),
        (1000.00, "0-1000"),
        (1000.01, "1001-2000"),
        (2000, "1001-2000"),
        (3000, "2001-3000"),
        (4000, "3001-4000"),
        (4000.5, "4001+"),
        (10_000, "4001+"),
    ],
)
def test_histogram_boundaries_belong_to_lower_bucket(net, bucket):
    assert bucket_label(net) == bucket


def test_histogram_counts_records(make_record, fixed_now):
    records = [make_record(1000), make_record(1500), make_record(1999), make_record(5000)]

    summary = summarize(records, now=fixed_now)

    assert summary.salary_histogram == {
        "0-1000": 1,
        "1001-2000": 2,
        "2001-3000": 0,
        "3001-4000": 0,
        "4001+": 1,
    }


def test_trend_covers_trailing_window_ending_now(make_record, fixed_now):
    records = [
        make_record(1000, month="2026-03"),
        make_record(250, month="2026-03", employee_id="EMP-002"),
        make_record(500, month="2025-10"),
        make_record(700, month="2025-09"),
    ]

    trend = summarize(records, window_months=6, now=fixed_now).monthly_trend

    assert [(p.year, p.month) for p in trend] == [
        (2025, 10),
        (2025, 11),
        (2025, 12),
        (2026, 1),
        (2026, 2),
        (2026, 3),
    ]
    assert [p.total for p in trend] == [500, 0, 0, 0, 0, 1250]
    assert trend[0].label == "Oct 2025"


def test_twelve_month_trend_crosses_year_boundary(make_record, fixed_now):
    trend = summarize([make_record(900, month="2025-04")], now=fixed_now).monthly_trend

    assert (trend[0].year, trend[0].month) == (2025, 4)
    assert trend[0].total == 900
    assert (trend[-1].year, trend[-1].month) == (2026, 3)


@pytest.mark.parametrize("window", [0, 7, "abc", None])
def test_unsupported_window_falls_back_to_twelve(fixed_now, window):
    assert len(summarize([], window_months=window, now=fixed_now).monthly_trend) == 12


def test_filter_by_department_and_year(make_record, fixed_now):
    records = [
        make_record(100, department="Sales", month="2026-01"),
        make_record(200, department="Sales", month="2025-12"),
        make_record(400, department="HR", month="2026-01"),
    ]

    assert summarize(records, LedgerFilter("Sales", 2026), now=fixed_now).total_paid == 100
    assert summarize(records, LedgerFilter("Sales"), now=fixed_now).total_paid == 300
    assert summarize(records, LedgerFilter(year=2026), now=fixed_now).total_paid == 500


def test_malformed_filter_values_mean_all(make_record, fixed_now):
    records = [make_record(100, month="2026-01"), make_record(200, department="HR", month="2024-05")]

    ledger_filter = LedgerFilter.parse(department="  ", year="twenty")

    assert ledger_filter == LedgerFilter()
    assert summarize(records, ledger_filter, now=fixed_now).total_paid == 300


def test_summarize_is_pure(make_record, fixed_now):
    records = [make_record(1000), make_record(2000, department=None)]
    snapshot = deepcopy(records)

    first = summarize(records, now=fixed_now)
    second = summarize(records, now=fixed_now)

    assert records == snapshot
    assert first == second


def test_history_for_one_year(make_record):
    records = [
        make_record(3000, month="2026-01", bonus=200, deductions=100),
        make_record(3500, month="2026-02", bonus=0, deductions=150),
        make_record(9999, month="2025-12"),
    ]

    history = summarize_history(records, 2026)

    assert history.total_earned == 6500
    assert history.average_salary == 3250
    assert history.highest_salary == 3500
    assert history.lowest_salary == 3000
    assert history.bonus_total == 200
    assert history.deductions_total == 250
    assert [p.total for p in history.monthly][:3] == [3000, 3500, 0]
    assert len(history.monthly) == 12
    assert history.monthly[0].label == "Jan"


def test_history_without_records_is_zero():
    history = summarize_history([], datetime(2026, 1, 1).year)

    assert (history.total_earned, history.highest_salary, history.lowest_salary) == (0, 0, 0)


def test_unassigned_bucket_can_be_selected(make_record, fixed_now):
    records = [make_record(200, department=None), make_record(300, department=""), make_record(400, department="HR")]

    summary = summarize(records, LedgerFilter.parse(department="Unassigned"), now=fixed_now)

    assert summary.total_paid == 500
    assert summary.per_department_total == {"Unassigned": 500}
