"""Fixed-rate amortization schedule generation"""

from typing import Dict, List, Optional

from lending_engine.domain.models import AmortizationResult, AmortizationRow
from lending_engine.utils.csv_utils import rows_to_csv
from lending_engine.utils.math_utils import round_currency, round_to_int

SCHEDULE_COLUMNS = ("month", "payment", "principal", "interest", "balance")


def monthly_payment(principal: float, monthly_rate: float, num_payments: int) -> float:
    """Level payment for a fully amortizing loan; principal / n when interest-free"""
    if monthly_rate == 0:
        return principal / num_payments
    compound = (1 + monthly_rate) ** num_payments
    return principal * monthly_rate * compound / (compound - 1)


def compute_amortization(
    principal: float,
    annual_rate_percent: float,
    term_months: float,
) -> AmortizationResult:
    """
    Generate a month-by-month fixed-rate repayment schedule.

    Caller contract: principal >= 0, annual_rate_percent >= 0, term_months >= 1.
    These are enforced by the request schemas, not re-checked here.

    Requirements:
    - Monthly rate r = annual_rate_percent / 100 / 12
    - Each month: interest = balance * r, principal = payment - interest
    - Last month pays off the remaining balance exactly (absorbs float drift)
    - Row values are rounded to cents as each row is built; totals sum the
      rounded row payments

    Args:
        principal: Loan principal in dollars
        annual_rate_percent: Annual interest rate as a percentage (5.5 for 5.5%)
        term_months: Loan term in months

    Returns:
        AmortizationResult with one row per month and schedule totals

    Example:
        $12,000 at 0% over 12 months -> 12 payments of $1,000.00
    """
    num_payments = round_to_int(term_months)
    rate = annual_rate_percent / 100 / 12
    payment_amount = monthly_payment(principal, rate, num_payments)

    rows: List[AmortizationRow] = []
    balance = principal
    for month in range(1, num_payments + 1):
        interest = balance * rate
        principal_paid = payment_amount - interest
        payment = payment_amount

        # Final payment clears whatever is left
        if month == num_payments:
            principal_paid = balance
            payment = balance + interest

        balance = max(0.0, balance - principal_paid)

        rows.append(
            AmortizationRow(
                month=month,
                payment=round_currency(payment),
                principal=round_currency(principal_paid),
                interest=round_currency(interest),
                balance=round_currency(balance),
            )
        )

    total_paid = sum(row.payment for row in rows)

    return AmortizationResult(
        rows=tuple(rows),
        monthly_payment=round_currency(payment_amount),
        total_interest=round_currency(total_paid - principal),
        total_paid=round_currency(total_paid),
    )


def amortization_to_csv(
    result: AmortizationResult,
    headers: Optional[Dict[str, str]] = None,
) -> str:
    """Render a schedule as CSV (month, payment, principal, interest, balance)"""
    return rows_to_csv(
        (row.to_dict() for row in result.rows),
        SCHEDULE_COLUMNS,
        headers=headers,
    )
