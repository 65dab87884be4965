import pytest
from datetime import date

from app.core.exceptions import InvalidInputError
from app.schemas.ledger import CompSummary, EmployeeSummary
from app.services import aggregator

def _by_name(rows):
    return {r.employee_name: r for r in rows}

def test_balance_arithmetic(db_session, comp):
    comp("Anna", "2025-03-01", "day", 3)
    comp("Anna", "2025-03-10", "day", -1, note="took a day off in lieu")
    comp("Anna", "2025-03-12", "hour", 2)

    result = aggregator.query_window(db_session, month="2025-03")

    assert len(result.comp_summary) == 1
    s = result.comp_summary[0]
    assert (s.credit_days, s.debit_days, s.balance_days) == (3, 1, 2)
    assert (s.credit_hours, s.debit_hours, s.balance_hours) == (2, 0, 2)

def test_time_off_summary_counts(db_session, vacation, short):
    vacation("Anna", "2025-03-03", "2025-03-07")
    short("Anna", "2025-03-10", hours=3)
    short("Anna", "2025-03-11", hours=5)
    short("Mike", "2025-03-11")

    summary = _by_name(aggregator.query_window(db_session, month="2025-03").summary)

    assert summary["Anna"] == EmployeeSummary(employee_name="Anna", vacation_days=5, short_days=2, short_hours=8)
    assert summary["Mike"] == EmployeeSummary(employee_name="Mike", vacation_days=0, short_days=1, short_hours=4)

def test_comp_only_employee_appears_in_merged_year(db_session, vacation, comp):
    vacation("Anna", "2025-05-01", "2025-05-02")
    comp("Zoltan", "2025-06-01", "day", 2)
    comp("Zoltan", "2025-07-01", "hour", -3)

    merged = _by_name(aggregator.year_summary(db_session, 2025))

    assert set(merged) == {"Anna", "Zoltan"}
    z = merged["Zoltan"]
    assert (z.vacation_days, z.short_days, z.short_hours) == (0, 0, 0)
    assert (z.credit_days, z.balance_days) == (2, 2)
    assert (z.debit_hours, z.balance_hours) == (3, -3)
    a = merged["Anna"]
    assert a.vacation_days == 2
    assert (a.balance_days, a.balance_hours) == (0, 0)

def test_query_window_merged_includes_comp_only_employee(db_session, short, comp):
    short("Anna", "2025-03-02", hours=2)
    comp("Bela", "2025-03-03", "hour", 5)

    result = aggregator.query_window(db_session, year=2025)

    assert [m.employee_name for m in result.merged] == ["Anna", "Bela"]
    assert result.merged[1].short_hours == 0
    assert result.merged[1].balance_hours == 5

def test_merge_summaries_outer_join_sorted():
    summary = [
        EmployeeSummary(employee_name="Mike", vacation_days=1),
        EmployeeSummary(employee_name="Anna", short_days=1, short_hours=4),
    ]
    comp_summary = [
        CompSummary(employee_name="Zoe", credit_days=1, balance_days=1),
        CompSummary(employee_name="Anna", credit_hours=2, balance_hours=2),
        CompSummary(employee_name="Bela", debit_days=2, balance_days=-2),
    ]

    merged = aggregator.merge_summaries(summary, comp_summary)

    assert [m.employee_name for m in merged] == ["Anna", "Bela", "Mike", "Zoe"]
    by_name = _by_name(merged)
    assert by_name["Anna"].short_hours == 4 and by_name["Anna"].balance_hours == 2
    assert by_name["Bela"].vacation_days == 0 and by_name["Bela"].balance_days == -2
    assert by_name["Mike"].balance_days == 0 and by_name["Mike"].vacation_days == 1

def test_merge_summaries_empty():
    assert aggregator.merge_summaries([], []) == []

def test_month_window_boundaries(db_session, vacation, comp):
    vacation("Anna", "2025-03-31")
    comp("Anna", "2025-03-31", "day", 1)

    march = aggregator.query_window(db_session, month="2025-03")
    april = aggregator.query_window(db_session, month="2025-04")

    assert [e.day for e in march.time_events] == [date(2025, 3, 31)]
    assert march.summary[0].vacation_days == 1
    assert march.comp_summary[0].balance_days == 1
    assert april.time_events == [] and april.comp_events == []
    assert april.summary == [] and april.comp_summary == []

def test_year_window_boundaries(db_session, vacation):
    vacation("Anna", "2024-12-30", "2025-01-02")

    assert aggregator.year_summary(db_session, 2024)[0].vacation_days == 2
    assert aggregator.year_summary(db_session, 2025)[0].vacation_days == 2

def test_summary_sorted_by_name_regardless_of_insertion(db_session, vacation, comp):
    for name in ["Zoe", "Anna", "Mike", "Bela"]:
        vacation(name, "2025-03-01")
        comp(name, "2025-03-01", "hour", 1)

    result = aggregator.query_window(db_session, month="2025-03")

    expected = ["Anna", "Bela", "Mike", "Zoe"]
    assert [s.employee_name for s in result.summary] == expected
    assert [s.employee_name for s in result.comp_summary] == expected
    assert [s.employee_name for s in result.merged] == expected

def test_raw_events_newest_day_first_then_name(db_session, vacation):
    vacation("Mike", "2025-03-01", "2025-03-02")
    vacation("Anna", "2025-03-01", "2025-03-02")

    events = aggregator.query_window(db_session, month="2025-03").time_events

    assert [(e.day.day, e.employee_name) for e in events] == [
        (2, "Anna"), (2, "Mike"), (1, "Anna"), (1, "Mike"),
    ]

def test_employee_filter(db_session, vacation, comp):
    vacation("Anna", "2025-03-01")
    vacation("Mike", "2025-03-01")
    comp("Mike", "2025-03-01", "day", 1)

    result = aggregator.query_window(db_session, month="2025-03", employee_name=" Anna ")

    assert [e.employee_name for e in result.time_events] == ["Anna"]
    assert result.comp_events == []
    assert [s.employee_name for s in result.merged] == ["Anna"]

def test_raw_list_is_capped_but_summary_is_not(db_session, vacation):
    vacation("Anna", "2025-03-01", "2025-03-10")

    result = aggregator.query_window(db_session, month="2025-03", limit=3)

    assert len(result.time_events) == 3
    assert result.time_events[0].day == date(2025, 3, 10)
    assert result.summary[0].vacation_days == 10

def test_no_window_returns_everything(db_session, vacation):
    vacation("Anna", "2019-01-01")
    vacation("Anna", "2031-01-01")

    result = aggregator.query_window(db_session)

    assert result.window.date_from is None and result.window.date_to is None
    assert len(result.time_events) == 2

def test_month_and_year_are_exclusive(db_session):
    with pytest.raises(InvalidInputError):
        aggregator.query_window(db_session, month="2025-03", year=2025)

def test_window_is_reported(db_session):
    result = aggregator.query_window(db_session, month="2025-02")
    assert result.window.date_from == date(2025, 2, 1)
    assert result.window.date_to == date(2025, 3, 1)
