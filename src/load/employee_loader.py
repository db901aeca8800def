"""
Employee Loader - Load Layer

Copies raw staging rows into the canonical employee table:
selects the source fields, casts them to canonical types, enforces
bounded ranges and assigns EmployeeID in load order.
"""

import logging
from typing import Dict, List

import polars as pl

from src.coreutils.errors import ConstraintViolation, SchemaMismatch
from src.extract.schemas import RAW_EMPLOYEE_FIELDS, RAW_FLAG_FIELDS
from src.extract.staging import RawEmployeeStaging
from src.transformation.schemas import (
    EMPLOYEE_SCHEMA,
    NON_NEGATIVE_FIELDS,
    ORDINAL_RANGES,
    POSITIVE_FIELDS,
)

logger = logging.getLogger(__name__)


def _cast_source_fields(raw_df: pl.DataFrame) -> pl.DataFrame:
    """Cast each source field to its canonical dtype, keeping text flags as text"""
    columns = []
    for field in RAW_EMPLOYEE_FIELDS:
        series = raw_df.get_column(field)
        target = EMPLOYEE_SCHEMA[field]

        # Yes/No flags are mapped by the normalizer, not here
        if field in RAW_FLAG_FIELDS and series.dtype == pl.String:
            columns.append(series)
            continue

        if target.is_integer() and series.dtype.is_float():
            fractional = (series.is_not_null() & (series != series.round(0))).sum()
            if fractional > 0:
                raise SchemaMismatch(
                    f"Field '{field}' has {fractional} non-integer value(s) for {target}"
                )

        try:
            columns.append(series.cast(target, strict=True))
        except (pl.exceptions.InvalidOperationError, pl.exceptions.ComputeError) as e:
            raise SchemaMismatch(
                f"Field '{field}' cannot be cast from {series.dtype} to {target}: {e}"
            ) from e

    return pl.DataFrame(columns)


def _constraint_masks(df: pl.DataFrame) -> Dict[str, pl.Expr]:
    """Boolean expressions that are true for rows violating a constraint"""
    masks = {}
    for field, (low, high) in ORDINAL_RANGES.items():
        masks[f"{field} BETWEEN {low} AND {high}"] = pl.col(field).is_not_null() & ~pl.col(
            field
        ).is_between(low, high, closed="both")
    for field in POSITIVE_FIELDS:
        masks[f"{field} > 0"] = pl.col(field) <= 0
    for field in NON_NEGATIVE_FIELDS:
        masks[f"{field} >= 0"] = pl.col(field) < 0
    for field in RAW_FLAG_FIELDS:
        if df.schema[field] != pl.String:
            masks[f"{field} IN (0, 1)"] = pl.col(field).is_not_null() & ~pl.col(
                field
            ).is_in([0, 1])
    return {rule: mask.fill_null(False) for rule, mask in masks.items()}


def find_constraint_violations(df: pl.DataFrame) -> Dict[str, int]:
    """
    Count rows violating each range or positivity rule

    Args:
        df: Employee data with canonical dtypes

    Returns:
        Dict: Rule description -> number of violating rows (only nonzero rules)
    """
    masks = _constraint_masks(df)
    counts = df.select(
        [mask.sum().alias(rule) for rule, mask in masks.items()]
    ).row(0, named=True)
    return {rule: count for rule, count in counts.items() if count > 0}


def load_employee_records(
    staging: RawEmployeeStaging, reject_invalid_records: bool = False
) -> pl.DataFrame:
    """
    Load raw staging rows into the canonical employee table

    The staging input is discarded after a successful load. On any
    failure it is left untouched.

    Args:
        staging: Raw employee staging
        reject_invalid_records: Drop rows violating constraints instead of
            failing the run

    Returns:
        pl.DataFrame: Employee table with EmployeeID assigned from 1
    """
    raw_df = staging.frame
    logger.info(f"Loading {raw_df.height} raw rows into employee table")

    missing: List[str] = [f for f in RAW_EMPLOYEE_FIELDS if f not in raw_df.columns]
    if missing:
        logger.error(f"❌ Raw source is missing required fields: {missing}")
        raise SchemaMismatch(
            f"Raw source is missing required fields: {missing}", missing_fields=missing
        )

    extra = [c for c in raw_df.columns if c not in RAW_EMPLOYEE_FIELDS]
    if extra:
        logger.info(f"Ignoring {len(extra)} raw columns not in employee table: {extra}")

    employees_df = _cast_source_fields(raw_df)

    violations = find_constraint_violations(employees_df)
    if violations:
        for rule, count in violations.items():
            logger.warning(f"⚠️ {count} record(s) violate {rule}")

        if reject_invalid_records:
            masks = list(_constraint_masks(employees_df).values())
            before = employees_df.height
            employees_df = employees_df.filter(~pl.any_horizontal(masks))
            logger.warning(
                f"⚠️ Rejected {before - employees_df.height} invalid record(s) at load"
            )
        else:
            rule, count = next(iter(violations.items()))
            column = rule.split(" ", 1)[0]
            logger.error(f"❌ Load aborted: {count} record(s) violate {rule}")
            raise ConstraintViolation(column, count, rule)

    employees_df = employees_df.with_row_index("EmployeeID", offset=1).with_columns(
        pl.col("EmployeeID").cast(pl.Int64())
    )

    staging.discard()

    logger.info(f"✅ Loaded {employees_df.height} employee records")
    return employees_df
