from src.staffdesk.staffdesk.payroll.calculator.standard_calculator import ProRataSalaryCalculator


def test_prorata_thirty_day_month():
    calc = ProRataSalaryCalculator()
    assert calc.payable_amount(base_salary=30000, days_in_month=30, payable_days=28) == 28000.00


def test_prorata_rounds_to_cents():
    calc = ProRataSalaryCalculator()
    assert calc.payable_amount(base_salary=10000, days_in_month=31, payable_days=10) == 3225.81


def test_full_month_pays_base_salary():
    calc = ProRataSalaryCalculator()
    assert calc.payable_amount(base_salary=45000.5, days_in_month=28, payable_days=28) == 45000.5


def test_no_payable_days_pays_nothing():
    calc = ProRataSalaryCalculator()
    assert calc.payable_amount(base_salary=30000, days_in_month=31, payable_days=0) == 0.0
