# app/services/premium.py
"""Premium estimates shown before a policy is bought on chain."""

import math

from app.core.constants import BASIS_POINTS_PER_PERCENT, MONTHS_PER_YEAR
from app.core.exceptions import QuoteValidationError
from app.models.insurance_option import InsuranceOption, PremiumQuote


def to_basis_points(rate_percent: float) -> int:
    """2.5 (%) -> 250 bps, truncated."""
    return math.floor(round(rate_percent * BASIS_POINTS_PER_PERCENT, 6))


def monthly_premium(value: float, coverage_percent: float, premium_rate: float) -> float:
    return value * (coverage_percent / 100) * (premium_rate / 100) / MONTHS_PER_YEAR


def quote_premium(option: InsuranceOption, coverage_percent: float, duration_months: int) -> PremiumQuote:
    """
    Estimate the premium for covering part of an option's value.

    The contract computes the premium actually charged; this mirrors the
    estimate users see while choosing coverage.
    """
    if not 0 < coverage_percent <= 100:
        raise QuoteValidationError("coverage percent must be in (0, 100]", field="coveragePercent")
    if duration_months < 1:
        raise QuoteValidationError("duration must be at least one month", field="durationMonths")

    monthly = monthly_premium(option.value, coverage_percent, option.premium_rate)

    return PremiumQuote(
        option_id=option.id,
        coverage_percent=coverage_percent,
        duration_months=duration_months,
        covered_value=round(option.value * coverage_percent / 100, 2),
        monthly_premium=round(monthly, 2),
        total_premium=round(monthly * duration_months, 2),
        premium_rate_bps=to_basis_points(option.premium_rate)
    )
