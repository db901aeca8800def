"""
DuckDB Store - Load Layer

Persists the employee table and attrition summaries into a DuckDB
database file that the dashboard can query directly.
"""

import logging
import os
from typing import Dict, List

import duckdb
import polars as pl

logger = logging.getLogger(__name__)

EMPLOYEE_TABLE = "employee_data"


def summary_table_name(dimension: str) -> str:
    return f"attrition_by_{dimension}"


def save_to_duckdb(
    employees_df: pl.DataFrame,
    report: Dict[str, pl.DataFrame],
    db_path: str,
) -> List[str]:
    """
    Replace the employee and summary tables in a DuckDB database

    Args:
        employees_df: Categorized employee table
        report: Dimension name -> summary table
        db_path: Path to the DuckDB database file

    Returns:
        List[str]: Names of the tables written
    """
    logger.info(f"Writing employee data and {len(report)} summaries to {db_path}")

    os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)

    tables = {EMPLOYEE_TABLE: employees_df}
    tables.update({summary_table_name(name): df for name, df in report.items()})

    conn = duckdb.connect(db_path)
    try:
        for table, df in tables.items():
            conn.register("incoming", df)
            conn.execute(f'CREATE OR REPLACE TABLE "{table}" AS SELECT * FROM incoming')
            conn.unregister("incoming")
            logger.info(f"Wrote {df.height} rows to table {table}")
    except Exception as e:
        logger.error(f"❌ Error writing to DuckDB database {db_path}: {e}")
        raise
    finally:
        conn.close()

    return list(tables)


def read_table(db_path: str, table: str) -> pl.DataFrame:
    """
    Read a table back from the DuckDB database

    Summary tables are returned in their stored order
    (AttritionRate descending).
    """
    if not os.path.exists(db_path):
        raise FileNotFoundError(f"DuckDB database not found: {db_path}")

    conn = duckdb.connect(db_path, read_only=True)
    try:
        if table.startswith("attrition_by_"):
            sql = f'SELECT * FROM "{table}" ORDER BY AttritionRate DESC NULLS LAST, GroupKey NULLS LAST'
        else:
            sql = f'SELECT * FROM "{table}"'
        return conn.execute(sql).pl()
    finally:
        conn.close()
