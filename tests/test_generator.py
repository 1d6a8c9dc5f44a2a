import math
import random
from collections import defaultdict
from datetime import date

import pytest

from timesheet_generator.core.calendar import empty_leave_map, is_working_day
from timesheet_generator.core.date_filters import expand_range
from timesheet_generator.core.generator import (
    GenerationPolicy,
    generate_timesheet,
    filter_entries,
    round_to_half,
    total_hours_for_employee,
    total_hours_for_project,
)
from timesheet_generator.core.reference_data import Employee, Project, ReferenceData

# Includes New Year's Day (Thu), Republic Day (Mon) and several weekends
JANUARY = expand_range(date(2026, 1, 1), date(2026, 1, 31))
WEEK = expand_range(date(2026, 2, 2), date(2026, 2, 6))


def _by_employee_day(entries):
    grouped = defaultdict(list)
    for e in entries:
        grouped[(e.employee_id, e.date)].append(e)
    return grouped


class RecordingRandom(random.Random):
    """Remembers every daily total drawn, in draw order."""

    def __init__(self, seed, policy):
        super().__init__(seed)
        self.policy = policy
        self.daily_draws = []

    def uniform(self, a, b):
        value = super().uniform(a, b)
        if (a, b) == (self.policy.daily_hours_min, self.policy.daily_hours_max):
            self.daily_draws.append(round_to_half(value))
        return value


def test_round_to_half():
    assert round_to_half(7.74) == 7.5
    assert round_to_half(7.76) == 8.0
    assert round_to_half(13.9) == 14.0
    # ties go to the even multiple of 0.5
    assert round_to_half(8.25) == 8.0
    assert round_to_half(8.75) == 9.0


@pytest.mark.parametrize("seed", range(20))
def test_daily_totals_are_conserved(reference, seed):
    entries = generate_timesheet({}, JANUARY, reference, rng=random.Random(seed))

    for (_, _), day_entries in _by_employee_day(entries).items():
        daily = sum(e.hours for e in day_entries)
        assert 7.5 <= daily <= 14
        assert (daily * 2) == int(daily * 2)
        assert len(day_entries) == len(reference.projects)
        assert len({e.project_code for e in day_entries}) == len(reference.projects)


@pytest.mark.parametrize("seed", range(10))
def test_each_day_adds_up_to_its_drawn_total(reference, seed):
    policy = GenerationPolicy()
    rng = RecordingRandom(seed, policy)
    entries = generate_timesheet({}, JANUARY, reference, policy, rng)

    # Days are drawn per employee, then per working day
    drawn_days = [
        (employee.id, day)
        for employee in reference.employees
        for day in JANUARY
        if is_working_day(day, employee.id, {}, reference)
    ]
    assert len(rng.daily_draws) == len(drawn_days)

    grouped = _by_employee_day(entries)
    for key, drawn in zip(drawn_days, rng.daily_draws):
        assert sum(e.hours for e in grouped[key]) == drawn


@pytest.mark.parametrize("daily", [7.5, 8.0, 9.5, 11.0, 12.5, 14.0])
def test_fixed_daily_total_is_hit_exactly(reference, daily):
    policy = GenerationPolicy(daily_hours_min=daily, daily_hours_max=daily)
    entries = generate_timesheet({}, WEEK, reference, policy, random.Random(int(daily * 10)))

    for day_entries in _by_employee_day(entries).values():
        assert sum(e.hours for e in day_entries) == daily


@pytest.mark.parametrize("seed", range(20))
def test_project_slots_respect_floor_and_half_hours(reference, seed):
    entries = generate_timesheet({}, WEEK, reference, rng=random.Random(seed))

    for e in entries:
        assert e.hours >= 1
        assert (e.hours * 2) == int(e.hours * 2)


def test_no_entries_on_non_working_days(reference):
    leave_map = empty_leave_map(reference)
    leave_map["emp-002"] = {date(2026, 1, 5), date(2026, 1, 6)}

    entries = generate_timesheet(leave_map, JANUARY, reference, rng=random.Random(7))
    worked = {(e.employee_id, e.date) for e in entries}

    for employee in reference.employees:
        for day in JANUARY:
            expected = is_working_day(day, employee.id, leave_map, reference)
            assert ((employee.id, day) in worked) == expected


def test_holiday_produces_no_entries(reference):
    entries = generate_timesheet({}, [date(2026, 1, 1)], reference, rng=random.Random(1))
    assert entries == []


def test_full_week_for_one_employee(reference):
    single = ReferenceData(
        employees=reference.employees[:1],
        projects=reference.projects,
        holidays=reference.holidays,
    )
    entries = generate_timesheet({}, WEEK, single, rng=random.Random(3))

    assert len(entries) == 5 * len(reference.projects)
    assert {e.date for e in entries} == set(WEEK)


def test_leave_only_affects_marked_employee(reference):
    leave_map = {"emp-001": {date(2026, 2, 3)}}
    entries = generate_timesheet(leave_map, WEEK, reference, rng=random.Random(11))

    on_leave_day = [e for e in entries if e.date == date(2026, 2, 3)]
    assert not [e for e in on_leave_day if e.employee_id == "emp-001"]
    for employee in reference.employees[1:]:
        assert len([e for e in on_leave_day if e.employee_id == employee.id]) == len(reference.projects)


def test_entries_are_sorted(reference):
    entries = generate_timesheet({}, JANUARY, reference, rng=random.Random(5))
    keys = [(e.date.isoformat(), e.employee_name, e.project_name) for e in entries]
    assert keys == sorted(keys)


def test_entry_ids_and_tasks(reference):
    entries = generate_timesheet({}, WEEK, reference, rng=random.Random(9))
    for e in entries:
        assert e.id == f"{e.employee_id}-{e.date.isoformat()}-{e.project_code}"
        employee = reference.find_employee(e.employee_id)
        assert e.task_description in employee.task_categories
        assert e.employee_name == employee.name
        assert e.project_name == reference.find_project(e.project_code).name


def test_seeded_generation_is_reproducible(reference):
    first = generate_timesheet({}, WEEK, reference, rng=random.Random(42))
    second = generate_timesheet({}, WEEK, reference, rng=random.Random(42))
    assert first == second


def test_empty_range_gives_no_entries(reference):
    assert generate_timesheet({}, [], reference) == []


def test_project_share_is_capped(reference):
    # Only the remainder-taking slot may go past 60% of the day
    for seed in range(30):
        entries = generate_timesheet({}, WEEK, reference, rng=random.Random(seed))
        for day_entries in _by_employee_day(entries).values():
            daily = sum(e.hours for e in day_entries)
            cap = math.ceil(0.6 * daily * 2) / 2
            assert len([e for e in day_entries if e.hours > cap]) <= 1


def test_last_slot_absorbs_shortfall_below_floor():
    """Seven one-hour floors in a 7.5h day leave only half an hour for the eighth project."""
    projects = tuple(Project(code=f"P{i}", name=f"Project {i}") for i in range(8))
    employee = Employee(id="e1", name="Solo", role="Tester", task_categories=("Testing",))
    reference = ReferenceData(employees=(employee,), projects=projects).validate(7.5, 1.0)
    policy = GenerationPolicy(daily_hours_min=7.5, daily_hours_max=7.5)

    entries = generate_timesheet({}, [date(2026, 2, 2)], reference, policy, random.Random(0))

    assert len(entries) == 8
    assert sum(e.hours for e in entries) == 7.5
    assert sorted(e.hours for e in entries) == [0.5] + [1.0] * 7


def test_totals_helpers(reference):
    entries = generate_timesheet({}, WEEK, reference, rng=random.Random(2))
    grand = sum(e.hours for e in entries)

    assert sum(total_hours_for_employee(entries, e.id) for e in reference.employees) == grand
    assert sum(total_hours_for_project(entries, p.code) for p in reference.projects) == grand


def test_filter_entries(reference):
    entries = generate_timesheet({}, WEEK, reference, rng=random.Random(4))

    spark = filter_entries(entries, project_code="SPARK")
    assert spark and all(e.project_code == "SPARK" for e in spark)

    one_day = filter_entries(entries, employee_id="emp-003", work_date=date(2026, 2, 4))
    assert len(one_day) == len(reference.projects)
    assert filter_entries(entries) == entries
