from datetime import date

import pytest

from src.timewage.timewage.core.enums import ContractCategory
from src.timewage.timewage.payroll.calculator.standard_calculator import StandardWageCalculator
from src.timewage.timewage.payroll.model import AllowanceEntitlement, HourTotals, PayRateConfig

RATE = PayRateConfig(
    contract_category=ContractCategory.PERMANENT,
    department_id=1,
    main_work_hour_rate=1000,
    regular_overtime_rate=1500,
    weekly_overtime_rate=2000,
)


def _calculate(hours: HourTotals, rate: PayRateConfig = RATE, allowances=()):
    return StandardWageCalculator().calculate(
        employee_id=7,
        period_start=date(2025, 3, 1),
        period_end=date(2025, 3, 31),
        hours=hours,
        rate=rate,
        allowances=list(allowances),
    )


def test_monthly_wage_breakdown():
    allowances = [
        AllowanceEntitlement(employee_id=7, allowance_type="Transport", amount=30000),
        AllowanceEntitlement(employee_id=7, allowance_type="Meal", amount=20000),
    ]

    wage = _calculate(HourTotals(160, 10, 5), allowances=allowances)

    assert wage.base_salary == 160000
    assert wage.overtime_salary == 15000
    assert wage.weekly_overtime_salary == 10000
    assert wage.total_allowances == 50000
    assert wage.total_payable == 235000
    assert len(wage.allowances) == 2


def test_amounts_round_half_up_to_whole_units():
    rate = PayRateConfig(ContractCategory.CONTRACT, 1, 1001, 1001, 1001)

    wage = _calculate(HourTotals(2.25, 0.5, 0.01), rate=rate)

    assert wage.base_salary == 2252
    assert wage.overtime_salary == 501
    assert wage.weekly_overtime_salary == 10


def test_no_hours_pays_only_allowances():
    wage = _calculate(HourTotals(), allowances=[AllowanceEntitlement(7, "Housing", 12345)])

    assert wage.base_salary == wage.overtime_salary == wage.weekly_overtime_salary == 0
    assert wage.total_payable == 12345


@pytest.mark.parametrize(
    "hours,rates",
    [
        (HourTotals(0.33, 0.67, 1.11), (999, 1499, 1999)),
        (HourTotals(173.25, 12.5, 3.75), (18500, 27750, 37000)),
        (HourTotals(7.99, 0, 0), (1, 1, 1)),
    ],
)
def test_total_is_sum_of_components(hours, rates):
    rate = PayRateConfig(ContractCategory.PERMANENT, 1, *rates)

    wage = _calculate(hours, rate=rate, allowances=[AllowanceEntitlement(7, "Meal", 777)])

    assert wage.total_payable == wage.base_salary + wage.overtime_salary + wage.weekly_overtime_salary + wage.total_allowances
