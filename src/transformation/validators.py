"""
Data Validators - Transform Layer

Diagnostic checks on the employee table. Nothing here mutates data;
missing values are reported, not repaired.
"""

import polars as pl
from typing import Dict, Any, List, Optional
from .schemas import (
    REQUIRED_FIELDS,
    SALARY_CATEGORIES,
    TENURE_CATEGORIES,
)
import logging

logger = logging.getLogger(__name__)


def check_required_nulls(
    df: pl.DataFrame, fields: Optional[List[str]] = None
) -> Dict[str, int]:
    """
    Count missing values in the required fields

    Args:
        df: Employee table
        fields: Fields to check (defaults to Age, Attrition,
            BusinessTravel, DistanceFromHome)

    Returns:
        Dict: Field name -> number of null values
    """
    fields = fields or REQUIRED_FIELDS
    logger.info(f"Checking missing values in {fields}")

    null_counts = df.select(
        [pl.col(field).is_null().sum().alias(field) for field in fields]
    ).row(0, named=True)

    for field, null_count in null_counts.items():
        if null_count > 0:
            logger.warning(f"Missing values in '{field}': {null_count}")

    if not any(null_counts.values()):
        logger.info("No missing values found in required fields")

    return null_counts


def validate_data_quality(df: pl.DataFrame) -> Dict[str, Any]:
    """
    Validate data quality and return quality metrics

    Args:
        df: Employee table

    Returns:
        Dict: Quality metrics (null counts per column, duplicate ids)
    """
    logger.info("Validating employee data quality")

    quality_metrics = {
        "total_records": df.height,
        "null_counts": {},
        "duplicate_counts": {},
        "data_types": df.schema,
    }

    # Check for null values in all columns
    for column in df.columns:
        null_count = df.select(pl.col(column).is_null().sum()).item()
        quality_metrics["null_counts"][column] = null_count

    if "EmployeeID" in df.columns:
        duplicate_count = df.height - df.select(pl.col("EmployeeID").n_unique()).item()
        quality_metrics["duplicate_counts"]["EmployeeID"] = duplicate_count

    # Log quality issues
    for column, null_count in quality_metrics["null_counts"].items():
        if null_count > 0:
            logger.warning(f"Column '{column}' has {null_count} null values")

    for key, duplicate_count in quality_metrics["duplicate_counts"].items():
        if duplicate_count > 0:
            logger.warning(f"Duplicate records found for '{key}': {duplicate_count}")

    logger.info("Data quality validation completed")
    return quality_metrics


def validate_business_rules(df: pl.DataFrame) -> bool:
    """
    Validate cleaned employee data before aggregation

    Flags must be 0/1 and every record must carry exactly one known
    tenure and salary category.

    Args:
        df: Categorized employee table

    Returns:
        bool: True if all business rules pass
    """
    logger.info("Validating business rules for categorized employee data")

    for flag in ["Attrition", "OverTime"]:
        invalid_flags = df.filter(
            pl.col(flag).is_not_null() & ~pl.col(flag).is_in([0, 1])
        ).height
        if invalid_flags > 0:
            raise ValueError(f"Found {invalid_flags} records with {flag} not in (0, 1)")

    for column, labels in [
        ("TenureCategory", TENURE_CATEGORIES),
        ("SalaryCategory", SALARY_CATEGORIES),
    ]:
        uncategorized = df.filter(
            pl.col(column).is_null() | ~pl.col(column).is_in(labels)
        ).height
        if uncategorized > 0:
            raise ValueError(f"Found {uncategorized} records without a valid {column}")

    logger.info("Business rules validation passed")
    return True
