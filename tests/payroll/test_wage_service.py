from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, time, timedelta

import pytest

from src.timewage.timewage.core.enums import ContractCategory, PaymentStatus
from src.timewage.timewage.core.exceptions import AlreadyGenerated, ConfigurationMissing, EmployeeNotFound
from src.timewage.timewage.employees.model import Employee
from src.timewage.timewage.payroll.model import AllowanceEntitlement, PayRateConfig
from src.timewage.timewage.payroll.service import WageService
from tests.fakes import InMemoryAllowances, InMemoryAttendance, InMemoryEmployees, InMemoryRates, InMemoryWages

START = date(2025, 3, 1)
END = date(2025, 3, 31)
DEPT = 10
DEPT_X = 20


def _employee(employee_id: int, *, category=ContractCategory.PERMANENT, dept=DEPT, contract_end=None) -> Employee:
    return Employee(
        employee_id=employee_id,
        full_name=f"Employee {employee_id}",
        contract_category=category,
        department_id=dept,
        shift_id=1,
        contract_end_date=contract_end,
    )


def _add_month(attendance: InMemoryAttendance, employee_id: int) -> None:
    """20 working days: 8h main + 0.5h regular overtime each, 5h weekly overtime on one day."""
    for i in range(20):
        work_date = START + timedelta(days=i)
        attendance.add(
            employee_id=employee_id,
            work_date=work_date,
            check_in_time=datetime.combine(work_date, time(8, 0)),
            check_out_time=datetime.combine(work_date, time(17, 0)),
            main_work_hours=8.0,
            regular_overtime_hours=0.5,
            weekly_overtime_hours=5.0 if i == 6 else 0.0,
        )


class Fixture:
    def __init__(self, *employees: Employee):
        self.attendance = InMemoryAttendance()
        self.employees = InMemoryEmployees({e.employee_id: e for e in employees})
        self.rates = InMemoryRates()
        self.rates.add(PayRateConfig(ContractCategory.PERMANENT, DEPT, 1000, 1500, 2000))
        self.rates.add(PayRateConfig(ContractCategory.CONTRACT, DEPT, 800, 1200, 1600))
        self.allowances = InMemoryAllowances()
        self.wages = InMemoryWages()
        self.service = WageService(self.attendance, self.employees, self.rates, self.allowances, self.wages)

    def with_allowances(self, employee_id: int, *amounts: int) -> "Fixture":
        self.allowances.by_employee[employee_id] = [
            AllowanceEntitlement(employee_id=employee_id, allowance_type=f"A{i}", amount=a) for i, a in enumerate(amounts)
        ]
        return self


def test_calculate_wage_sums_period_hours():
    fx = Fixture(_employee(1)).with_allowances(1, 30000, 20000)
    _add_month(fx.attendance, 1)

    wage = fx.service.calculate_wage(1, START, END)

    assert (wage.hours.main_work_hours, wage.hours.regular_overtime_hours, wage.hours.weekly_overtime_hours) == (160.0, 10.0, 5.0)
    assert wage.base_salary == 160000
    assert wage.overtime_salary == 15000
    assert wage.weekly_overtime_salary == 10000
    assert wage.total_allowances == 50000
    assert wage.total_payable == 235000


def test_attendance_outside_period_is_ignored():
    fx = Fixture(_employee(1))
    _add_month(fx.attendance, 1)
    before = START - timedelta(days=1)
    fx.attendance.add(employee_id=1, work_date=before, check_in_time=datetime.combine(before, time(8, 0)), main_work_hours=8.0)

    assert fx.service.calculate_wage(1, START, END).hours.main_work_hours == 160.0


def test_missing_rate_fails_and_writes_nothing():
    fx = Fixture(_employee(1, category=ContractCategory.TRAINING, dept=DEPT_X))
    _add_month(fx.attendance, 1)

    with pytest.raises(ConfigurationMissing) as exc_info:
        fx.service.generate_for_employee(1, START, END)

    assert exc_info.value.contract_category == ContractCategory.TRAINING
    assert exc_info.value.department_id == DEPT_X
    assert fx.wages.records == {}


def test_unknown_employee():
    with pytest.raises(EmployeeNotFound):
        Fixture().service.calculate_wage(42, START, END)


def test_inverted_period_rejected():
    with pytest.raises(ValueError):
        Fixture(_employee(1)).service.calculate_wage(1, END, START)


def test_generate_twice_signals_already_generated_without_changes():
    fx = Fixture(_employee(1)).with_allowances(1, 50000)
    _add_month(fx.attendance, 1)
    first = fx.service.generate_for_employee(1, START, END)

    fx.allowances.by_employee[1].append(AllowanceEntitlement(1, "Bonus", 99999))
    with pytest.raises(AlreadyGenerated) as exc_info:
        fx.service.generate_for_employee(1, START, END)

    assert exc_info.value.existing == first
    assert list(fx.wages.records.values()) == [first]
    assert first.payment_status == PaymentStatus.UNPAID
    assert first.total_payable == 235000


def test_batch_isolates_failures_skips_existing_and_filters_ended_contracts(caplog):
    fx = Fixture(
        _employee(1),
        _employee(2, category=ContractCategory.TRAINING),
        _employee(3, contract_end=START - timedelta(days=1)),
        _employee(4, contract_end=START),
        _employee(5),
    )
    for employee_id in (1, 2, 3, 4, 5):
        _add_month(fx.attendance, employee_id)
    fx.service.generate_for_employee(5, START, END)

    with caplog.at_level(logging.INFO):
        report = fx.service.generate_for_period(START, END)

    assert sorted(r.employee_id for r in report.created) == [1, 4]
    assert report.skipped == [5]
    assert [f.employee_id for f in report.failures] == [2]
    assert "No pay rate configured" in report.failures[0].error
    assert 3 not in {r.employee_id for r in fx.wages.records.values()}
    assert "wage already generated, skipping" in caplog.text
    assert "wage generation failed" in caplog.text


def test_batch_rerun_is_idempotent():
    fx = Fixture(_employee(1), _employee(2))
    _add_month(fx.attendance, 1)
    _add_month(fx.attendance, 2)

    fx.service.generate_for_period(START, END)
    snapshot = dict(fx.wages.records)
    rerun = fx.service.generate_for_period(START, END)

    assert rerun.created == []
    assert sorted(rerun.skipped) == [1, 2]
    assert fx.wages.records == snapshot


def test_batch_department_filter():
    fx = Fixture(_employee(1), _employee(2, dept=DEPT_X))

    report = fx.service.generate_for_period(START, END, department_id=DEPT)

    assert [r.employee_id for r in report.created] == [1]
    assert report.failures == []


class FlakyAttendance(InMemoryAttendance):
    def __init__(self, failing_employee_id: int):
        super().__init__()
        self._failing = failing_employee_id

    def find_attendance_in_range(self, employee_id, start, end):
        if employee_id == self._failing:
            raise ConnectionError("attendance store unavailable")
        return super().find_attendance_in_range(employee_id, start, end)


def test_store_error_for_one_employee_does_not_abort_batch():
    fx = Fixture(_employee(1), _employee(2), _employee(3))
    fx.attendance = FlakyAttendance(failing_employee_id=2)
    fx.service = WageService(fx.attendance, fx.employees, fx.rates, fx.allowances, fx.wages)

    report = fx.service.generate_for_period(START, END)

    assert sorted(r.employee_id for r in report.created) == [1, 3]
    assert report.failures[0].employee_id == 2
    assert "unavailable" in report.failures[0].error


def test_contract_change_recomputes_unpaid_wages_only():
    fx = Fixture(_employee(1))
    _add_month(fx.attendance, 1)
    unpaid = fx.service.generate_for_employee(1, START, END)
    paid = fx.wages.put(
        replace(unpaid, wage_id=100, period_start=date(2025, 2, 1), period_end=date(2025, 2, 28), payment_status=PaymentStatus.PAID)
    )

    updated = fx.service.handle_contract_category_change(1, ContractCategory.CONTRACT)

    assert [w.wage_id for w in updated] == [unpaid.wage_id]
    recomputed = fx.wages.records[unpaid.wage_id]
    assert recomputed.base_salary == 128000
    assert recomputed.overtime_salary == 12000
    assert recomputed.weekly_overtime_salary == 8000
    assert recomputed.total_payable == 148000
    assert fx.wages.records[100] == paid


def test_contract_change_to_unconfigured_category_fails():
    fx = Fixture(_employee(1))
    fx.service.generate_for_employee(1, START, END)

    with pytest.raises(ConfigurationMissing):
        fx.service.handle_contract_category_change(1, ContractCategory.TRAINING)


def test_process_payments_marks_unpaid_once():
    fx = Fixture(_employee(1), _employee(2))
    report = fx.service.generate_for_period(START, END)
    ids = [r.wage_id for r in report.created]
    paid_at = datetime(2025, 4, 5, 10, 0)

    assert fx.service.process_payments(ids, paid_at=paid_at) == 2
    assert fx.service.process_payments(ids, paid_at=paid_at) == 0
    assert all(fx.wages.records[i].paid_at == paid_at for i in ids)


def test_wage_statistics():
    fx = Fixture(_employee(1), _employee(2), _employee(3, category=ContractCategory.CONTRACT))
    fx.rates.add(PayRateConfig(ContractCategory.PERMANENT, DEPT_X, 1000, 1500, 2000))
    fx.employees.employees[2] = _employee(2, dept=DEPT_X)
    for employee_id in (1, 2, 3):
        _add_month(fx.attendance, employee_id)
    report = fx.service.generate_for_period(START, END)
    fx.service.process_payments([report.created[0].wage_id])

    stats = fx.service.wage_statistics(START, END)

    assert stats.total_records == 3
    assert stats.total_amount == 185000 + 185000 + 148000
    assert (stats.paid_count, stats.unpaid_count) == (1, 2)
    assert stats.by_department[DEPT].count == 2
    assert stats.by_department[DEPT].average == (185000 + 148000) / 2
    assert stats.by_department[DEPT_X].total_amount == 185000
