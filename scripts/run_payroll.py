"""Close a pay period: reconcile weekly overtime, then generate wages.

Usage: python scripts/run_payroll.py 2025-03-01 2025-03-31 [department_id]
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.timewage.timewage.common.datetime_utils import parse_iso_date
from src.timewage.timewage.main import create_engine


def main(argv: list[str]) -> int:
    if len(argv) not in (2, 3):
        print(__doc__.strip().splitlines()[-1])
        return 2

    start, end = parse_iso_date(argv[0]), parse_iso_date(argv[1])
    department_id = int(argv[2]) if len(argv) == 3 else None

    container = create_engine()
    for employee in container.employees_repo.list_employees(department_id=department_id):
        if employee.is_eligible_for(start):
            container.weekly_reconciler.reconcile_period(employee.employee_id, start, end)

    report = container.wage_service.generate_for_period(start, end, department_id=department_id)
    print(f"created={len(report.created)} skipped={len(report.skipped)} failed={len(report.failures)}")
    for failure in report.failures:
        print(f"  employee {failure.employee_id}: {failure.error}")
    return 1 if report.failures else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
