"""
Raw Staging - Extract Layer

Holds the raw employee rows until the Loader has copied them into the
canonical employee table. Discarding is one-way: there is no rollback.
"""

import json
import logging
import os
from pathlib import Path
from typing import Union

import polars as pl

from src.coreutils.errors import StagingDiscarded
from .schemas import SUPPORTED_EXTENSIONS

logger = logging.getLogger(__name__)


class RawEmployeeStaging:
    """Raw employee rows awaiting load"""

    def __init__(self, df: pl.DataFrame, source: str = "<memory>"):
        self._df = df
        self.source = source
        self._discarded = False

    @classmethod
    def from_file(cls, filepath: Union[str, Path]) -> "RawEmployeeStaging":
        """
        Read a raw employee file into staging

        Args:
            filepath: Path to a .csv, .parquet or .json file

        Returns:
            RawEmployeeStaging: Staging wrapper around the raw frame
        """
        filepath = Path(filepath)
        logger.info(f"Reading raw employee data from: {filepath}")

        if not filepath.exists():
            raise FileNotFoundError(f"Raw employee file not found: {filepath}")

        suffix = filepath.suffix.lower()
        if suffix not in SUPPORTED_EXTENSIONS:
            raise ValueError(
                f"Unsupported raw file type '{suffix}', expected one of {sorted(SUPPORTED_EXTENSIONS)}"
            )

        if suffix == ".csv":
            df = pl.read_csv(filepath, infer_schema_length=10000)
        elif suffix == ".parquet":
            df = pl.read_parquet(filepath)
        else:
            with open(filepath, "r") as f:
                data = json.load(f)
            df = pl.DataFrame(data, strict=False, infer_schema_length=10000)

        logger.info(f"Staged {df.height} raw employee rows from {filepath}")
        return cls(df, source=os.fspath(filepath))

    @property
    def discarded(self) -> bool:
        return self._discarded

    @property
    def frame(self) -> pl.DataFrame:
        """The raw frame; unavailable after discard()"""
        if self._discarded:
            raise StagingDiscarded(f"Raw staging from {self.source} was discarded")
        return self._df

    def preview(self, n: int = 10) -> pl.DataFrame:
        """First n raw rows, for inspecting structure before cleaning"""
        return self.frame.head(n)

    def discard(self) -> None:
        """Drop the raw rows irrecoverably"""
        if self._discarded:
            return
        rows = self._df.height
        self._df = None
        self._discarded = True
        logger.info(f"🧹 Discarded {rows} raw staging rows from {self.source}")
