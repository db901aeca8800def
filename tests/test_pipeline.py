"""
Test Pipeline Orchestration - end-to-end run, single-use guard, persistence and CLI
"""

import os
import sys
from unittest.mock import patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import polars as pl
import pytest

from src.coreutils.config import PipelineConfig
from src.coreutils.errors import PipelineStateError, SchemaMismatch
from src.extract.staging import RawEmployeeStaging
from src.load.duckdb_store import read_table
from src.main import main
from src.orchestration.pipeline import AttritionPipeline
from src.transformation.schemas import ATTRITION_DIMENSIONS


def test_dry_run_produces_all_summaries(raw_staging, tmp_path):
    """A dry run computes every summary without touching the output directory"""
    output_dir = tmp_path / "output"
    pipeline = AttritionPipeline(
        PipelineConfig(output_dir=str(output_dir), dry_run=True)
    )

    result = pipeline.run(raw_staging)

    assert list(result.summaries) == list(ATTRITION_DIMENSIONS)
    assert result.summary("overall").rows() == [("All Employees", 10, 3, 30.0)]
    assert result.missing_values == {
        "Age": 0,
        "Attrition": 0,
        "BusinessTravel": 0,
        "DistanceFromHome": 0,
    }
    assert result.income_cap.threshold == pytest.approx(15030.0)
    assert result.employees["BusinessTravel"][0] == "Rarely"
    assert result.employees["Gender"][0] == "M"
    assert "SalaryCategory" in result.employees.columns
    assert raw_staging.discarded
    assert not output_dir.exists()
    print("✅ Dry run produced all attrition summaries")


def test_pipeline_runs_only_once(raw_employees_df):
    pipeline = AttritionPipeline(PipelineConfig(dry_run=True))
    pipeline.run(RawEmployeeStaging(raw_employees_df))

    with pytest.raises(PipelineStateError):
        pipeline.run(RawEmployeeStaging(raw_employees_df))

    assert pipeline.get_pipeline_status()["has_run"]


def test_unknown_summary_dimension(raw_staging):
    result = AttritionPipeline(PipelineConfig(dry_run=True)).run(raw_staging)

    with pytest.raises(KeyError):
        result.summary("education")


def test_pipeline_persists_files_and_duckdb_tables(raw_staging, tmp_path):
    output_dir = tmp_path / "output"
    db_path = tmp_path / "db" / "attrition.duckdb"
    config = PipelineConfig(output_dir=str(output_dir), duckdb_path=str(db_path))

    result = AttritionPipeline(config).run(raw_staging)

    for name in ATTRITION_DIMENSIONS:
        assert (output_dir / f"attrition_by_{name}.parquet").exists()
        assert (output_dir / f"attrition_by_{name}.json").exists()
    assert (output_dir / "employee_data.parquet").exists()
    assert result.saved_files["employee_data"]["parquet"].endswith(
        "employee_data.parquet"
    )

    stored = read_table(str(db_path), "attrition_by_department")
    assert stored.rows() == result.summary("department").rows()
    assert read_table(str(db_path), "employee_data").height == 10


def test_pipeline_reads_input_path_from_config(raw_employees_df, tmp_path):
    csv_path = tmp_path / "raw_employee_data.csv"
    raw_employees_df.write_csv(csv_path)

    result = AttritionPipeline(
        PipelineConfig(input_path=str(csv_path), dry_run=True)
    ).run()

    assert result.summary("overall")["AttritionRate"][0] == 30.0


def test_pipeline_without_input_fails():
    with pytest.raises(ValueError, match="ATTRITION_INPUT_PATH"):
        AttritionPipeline(PipelineConfig(dry_run=True)).run()


def test_schema_mismatch_aborts_before_later_stages(raw_employees_df):
    staging = RawEmployeeStaging(raw_employees_df.drop("MonthlyIncome"))

    with patch(
        "src.orchestration.pipeline.normalize_employee_data"
    ) as mock_normalize:
        with pytest.raises(SchemaMismatch):
            AttritionPipeline(PipelineConfig(dry_run=True)).run(staging)

    mock_normalize.assert_not_called()
    assert not staging.discarded


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("ATTRITION_INPUT_PATH", "data/raw.csv")
    monkeypatch.setenv("ATTRITION_OUTPUT_DIR", "results")
    monkeypatch.setenv("ATTRITION_CASE_INSENSITIVE_LABELS", "true")
    monkeypatch.setenv("ATTRITION_REJECT_INVALID_RECORDS", "1")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.delenv("ATTRITION_DUCKDB_PATH", raising=False)

    config = PipelineConfig.from_env()

    assert config.input_path == "data/raw.csv"
    assert config.output_dir == "results"
    assert config.duckdb_path is None
    assert config.case_sensitive_labels is False
    assert config.reject_invalid_records is True
    assert config.log_level == 10


def test_cli_dry_run_succeeds(raw_employees_df, tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("ATTRITION_LOG_DIR", str(tmp_path / "logs"))
    csv_path = tmp_path / "raw_employee_data.csv"
    raw_employees_df.write_csv(csv_path)

    exit_code = main(["--input", str(csv_path), "--dry-run"])

    assert exit_code == 0
    assert "Attrition by department" in capsys.readouterr().out
    assert (tmp_path / "logs").is_dir()


def test_cli_writes_outputs(raw_employees_df, tmp_path, monkeypatch):
    monkeypatch.setenv("ATTRITION_LOG_DIR", str(tmp_path / "logs"))
    csv_path = tmp_path / "raw_employee_data.csv"
    raw_employees_df.write_csv(csv_path)
    output_dir = tmp_path / "out"

    exit_code = main(
        [
            "--input",
            str(csv_path),
            "--output-dir",
            str(output_dir),
            "--case-insensitive-labels",
        ]
    )

    assert exit_code == 0
    assert (output_dir / "attrition_by_overall.parquet").exists()


def test_cli_failure_returns_one(tmp_path, monkeypatch):
    monkeypatch.setenv("ATTRITION_LOG_DIR", str(tmp_path / "logs"))

    exit_code = main(["--input", str(tmp_path / "missing.csv"), "--dry-run"])

    assert exit_code == 1


def test_pipeline_reports_data_quality(raw_employees_df):
    raw_df = raw_employees_df.with_columns(
        pl.when(pl.int_range(pl.len()) == 0)
        .then(None)
        .otherwise(pl.col("TotalWorkingYears"))
        .alias("TotalWorkingYears")
    )

    result = AttritionPipeline(PipelineConfig(dry_run=True)).run(
        RawEmployeeStaging(raw_df)
    )

    assert result.data_quality["total_records"] == 10
    assert result.data_quality["null_counts"]["TotalWorkingYears"] == 1
    assert result.data_quality["null_counts"]["Age"] == 0
    assert result.data_quality["duplicate_counts"]["EmployeeID"] == 0
