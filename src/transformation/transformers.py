"""
Data Transformers - Transform Layer

Pure functions that clean the employee table in place of the original
UPDATE statements: flag normalization, label standardization, income
outlier capping and tenure/salary bucketing.
"""

import polars as pl
from dataclasses import dataclass
from typing import Dict, Tuple
from .schemas import (
    BUSINESS_TRAVEL_LABELS,
    GENDER_LABELS,
    INCOME_CAP_MULTIPLIER,
    MARITAL_STATUS_LABELS,
)
import logging

logger = logging.getLogger(__name__)

FLAG_COLUMNS = ["Attrition", "OverTime"]


def _normalize_flag(df: pl.DataFrame, column: str) -> pl.Expr:
    """Map yes/no text to 1/0; numeric columns are already normalized"""
    dtype = df.schema[column]
    if dtype != pl.String:
        return pl.col(column).cast(pl.Int8())

    text = pl.col(column).str.strip_chars().str.to_lowercase()
    return (
        pl.when(text == "yes")
        .then(pl.lit(1, dtype=pl.Int8()))
        .otherwise(pl.lit(0, dtype=pl.Int8()))
        .alias(column)
    )


def _count_unrecognized_flags(df: pl.DataFrame) -> Dict[str, int]:
    """Count text flag values that are neither yes nor no"""
    counts = {}
    for column in FLAG_COLUMNS:
        if df.schema[column] != pl.String:
            continue
        text = pl.col(column).str.strip_chars().str.to_lowercase()
        counts[column] = df.select(
            (~text.is_in(["yes", "no"])).fill_null(True).sum()
        ).item()
    return counts


def _rewrite_labels(
    column: str, labels: Dict[str, str], case_sensitive: bool
) -> pl.Expr:
    """Rewrite matching labels, passing everything else through unchanged"""
    if case_sensitive:
        return pl.col(column).replace(labels)

    lowered = {raw.lower(): canonical for raw, canonical in labels.items()}
    key = pl.col(column).str.to_lowercase()
    return (
        pl.when(key.is_in(list(lowered)))
        .then(key.replace(lowered))
        .otherwise(pl.col(column))
        .alias(column)
    )


def normalize_employee_data(
    df: pl.DataFrame, case_sensitive_labels: bool = True
) -> pl.DataFrame:
    """
    Normalize flags and standardize categorical labels

    Attrition/OverTime: "yes" (any case) -> 1, anything else -> 0.
    BusinessTravel, Gender and MaritalStatus are rewritten through fixed
    lookups; unmatched values pass through unchanged.

    Args:
        df: Employee table from the loader
        case_sensitive_labels: Match label lookups exactly (default) or
            ignoring case

    Returns:
        pl.DataFrame: Normalized employee table
    """
    logger.info(
        f"Normalizing {df.height} employee records "
        f"(case_sensitive_labels={case_sensitive_labels})"
    )

    for column, count in _count_unrecognized_flags(df).items():
        if count > 0:
            logger.warning(
                f"⚠️ {count} '{column}' value(s) are neither yes nor no; treating as 0"
            )

    normalized_df = df.with_columns(
        [_normalize_flag(df, column) for column in FLAG_COLUMNS]
        + [
            _rewrite_labels(
                "BusinessTravel", BUSINESS_TRAVEL_LABELS, case_sensitive_labels
            ),
            _rewrite_labels("Gender", GENDER_LABELS, case_sensitive_labels),
            _rewrite_labels(
                "MaritalStatus", MARITAL_STATUS_LABELS, case_sensitive_labels
            ),
        ]
    )

    logger.info(f"Normalized {normalized_df.height} employee records")
    return normalized_df


@dataclass(frozen=True)
class IncomeCap:
    """Income ceiling computed once from a specific snapshot"""

    mean_income: float
    threshold: float


def compute_income_cap(df: pl.DataFrame) -> IncomeCap:
    """
    Compute the MonthlyIncome ceiling as 3 x mean over the whole table

    Args:
        df: Employee table before capping

    Returns:
        IncomeCap: Mean income and the derived threshold
    """
    mean_income = df.select(pl.col("MonthlyIncome").mean()).item()
    if mean_income is None:
        mean_income = 0.0
    cap = IncomeCap(
        mean_income=float(mean_income),
        threshold=float(mean_income) * INCOME_CAP_MULTIPLIER,
    )
    logger.info(
        f"Income cap: mean={cap.mean_income:.2f}, threshold={cap.threshold:.2f}"
    )
    return cap


def apply_income_cap(df: pl.DataFrame, cap: IncomeCap) -> pl.DataFrame:
    """
    Clamp MonthlyIncome values above the cap threshold to the threshold

    Applying the same cap again is a no-op.

    Args:
        df: Employee table
        cap: Cap computed by compute_income_cap

    Returns:
        pl.DataFrame: Employee table with capped incomes
    """
    income = pl.col("MonthlyIncome")
    over_cap = df.select((income > cap.threshold).sum()).item()

    capped_df = df.with_columns(
        pl.when(income > cap.threshold)
        .then(pl.lit(cap.threshold, dtype=pl.Float64()))
        .otherwise(income.cast(pl.Float64()))
        .alias("MonthlyIncome")
    )

    logger.info(f"Capped {over_cap} MonthlyIncome values at {cap.threshold:.2f}")
    return capped_df


def cap_monthly_income(df: pl.DataFrame) -> Tuple[pl.DataFrame, IncomeCap]:
    """Compute the income cap from df and apply it in a single pass"""
    cap = compute_income_cap(df)
    return apply_income_cap(df, cap), cap


def tenure_category_expr(column: str = "YearsAtCompany") -> pl.Expr:
    return (
        pl.when(pl.col(column) < 3)
        .then(pl.lit("Short-Term"))
        .when(pl.col(column).is_between(3, 7, closed="both"))
        .then(pl.lit("Medium-Term"))
        .otherwise(pl.lit("Long-Term"))
        .alias("TenureCategory")
    )


def salary_category_expr(column: str = "MonthlyIncome") -> pl.Expr:
    return (
        pl.when(pl.col(column) < 3000)
        .then(pl.lit("Low"))
        .when(pl.col(column).is_between(3000, 8000, closed="both"))
        .then(pl.lit("Medium"))
        .otherwise(pl.lit("High"))
        .alias("SalaryCategory")
    )


def tenure_category(years_at_company) -> str:
    """Tenure bucket for a single YearsAtCompany value"""
    if years_at_company is not None and years_at_company < 3:
        return "Short-Term"
    if years_at_company is not None and 3 <= years_at_company <= 7:
        return "Medium-Term"
    return "Long-Term"


def salary_category(monthly_income) -> str:
    """Salary bucket for a single MonthlyIncome value"""
    if monthly_income is not None and monthly_income < 3000:
        return "Low"
    if monthly_income is not None and 3000 <= monthly_income <= 8000:
        return "Medium"
    return "High"


def categorize_employees(df: pl.DataFrame) -> pl.DataFrame:
    """
    Add TenureCategory and SalaryCategory columns

    Categories are recomputed from YearsAtCompany and MonthlyIncome, so
    running this twice gives the same result.

    Args:
        df: Employee table after income capping

    Returns:
        pl.DataFrame: Employee table with both category columns
    """
    logger.info(f"Categorizing {df.height} employee records")

    categorized_df = df.with_columns([tenure_category_expr(), salary_category_expr()])

    logger.info(f"Categorized {categorized_df.height} employee records")
    return categorized_df
