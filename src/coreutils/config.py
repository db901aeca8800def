"""
Pipeline Configuration

Run settings resolved from the environment (.env supported via python-dotenv).
Command-line flags override these values in src.main.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.coreutils.env import env_get, env_flag


@dataclass
class PipelineConfig:
    """Settings for a single attrition ETL run"""

    input_path: Optional[str] = None
    output_dir: str = "output"
    duckdb_path: Optional[str] = None
    log_dir: str = "logs"
    log_level: int = logging.INFO
    case_sensitive_labels: bool = True
    reject_invalid_records: bool = False
    dry_run: bool = False

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        """Build a config from ATTRITION_* environment variables"""
        level_name = (env_get("LOG_LEVEL", "INFO") or "INFO").upper()
        return cls(
            input_path=env_get("ATTRITION_INPUT_PATH"),
            output_dir=env_get("ATTRITION_OUTPUT_DIR", "output"),
            duckdb_path=env_get("ATTRITION_DUCKDB_PATH"),
            log_dir=env_get("ATTRITION_LOG_DIR", "logs"),
            log_level=getattr(logging, level_name, logging.INFO),
            case_sensitive_labels=not env_flag("ATTRITION_CASE_INSENSITIVE_LABELS"),
            reject_invalid_records=env_flag("ATTRITION_REJECT_INVALID_RECORDS"),
        )
