"""
Local Storage - Load Layer

Pure functions for local file storage operations.
Writes the cleaned employee table and attrition summaries as Parquet and JSON.
"""

import polars as pl
import json
import os
from typing import Dict
import logging

logger = logging.getLogger(__name__)


def save_parquet(df: pl.DataFrame, filepath: str) -> str:
    """
    Save DataFrame to Parquet file

    Args:
        df: DataFrame to save
        filepath: Path to save file

    Returns:
        str: Path to saved file
    """
    logger.info(f"Saving DataFrame to Parquet: {filepath}")

    # Ensure directory exists
    os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)

    df.write_parquet(filepath)

    logger.info(f"Saved {df.height} records to {filepath}")
    return filepath


def save_json(df: pl.DataFrame, filepath: str) -> str:
    """
    Save DataFrame to JSON file

    Args:
        df: DataFrame to save
        filepath: Path to save file

    Returns:
        str: Path to saved file
    """
    logger.info(f"Saving DataFrame to JSON: {filepath}")

    # Ensure directory exists
    os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)

    data = df.to_dicts()

    with open(filepath, "w") as f:
        json.dump(data, f, indent=2, default=str)

    logger.info(f"Saved {len(data)} records to {filepath}")
    return filepath


def save_employee_data(df: pl.DataFrame, output_dir: str = "output") -> str:
    """
    Save the cleaned employee table

    Args:
        df: Categorized employee table
        output_dir: Output directory

    Returns:
        str: Path to saved file
    """
    return save_parquet(df, f"{output_dir}/employee_data.parquet")


def save_attrition_report(
    report: Dict[str, pl.DataFrame], output_dir: str = "output"
) -> Dict[str, Dict[str, str]]:
    """
    Save every attrition summary as Parquet and JSON

    Args:
        report: Dimension name -> summary table
        output_dir: Output directory

    Returns:
        Dict: Dimension name -> paths to saved files
    """
    logger.info(f"Saving {len(report)} attrition summaries to {output_dir}")

    saved = {}
    for name, summary_df in report.items():
        base_path = f"{output_dir}/attrition_by_{name}"
        saved[name] = {
            "parquet": save_parquet(summary_df, f"{base_path}.parquet"),
            "json": save_json(summary_df, f"{base_path}.json"),
        }

    logger.info(f"✅ Saved attrition summaries to {output_dir}")
    return saved
