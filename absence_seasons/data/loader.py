"""
Attendance data loader.
"""

import logging
import time
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from .access.access_and_storage import get_accessor
from .access.base import DataAccessor
from .config.paths import DataConfig
from .normalizer import RowNormalizer
from .schema import AttendanceRecord

logger = logging.getLogger(__name__)


class AttendanceLoader:
    """
    Loads raw attendance rows and normalizes them into records.

    Storage type and field spellings come from the data config; the input
    path can be overridden per call.
    """

    def __init__(self, config: Optional[DataConfig] = None,
                 accessor: Optional[DataAccessor] = None):
        self.config = config or DataConfig()
        self.accessor = accessor or get_accessor(self.config.get_storage_type())
        self.normalizer = RowNormalizer(self.config.get_field_candidates())

    def resolve_path(self, path: Optional[Union[str, Path]] = None) -> Path:
        return Path(path) if path else self.config.get_input_file_path()

    def load_raw(self, path: Optional[Union[str, Path]] = None) -> pd.DataFrame:
        """
        Read the raw attendance table.

        Raises:
            SourceUnavailableError: If the source is missing or unreadable
        """
        path = self.resolve_path(path)
        start = time.time()
        df = self.accessor.read_data(path)
        logger.info(f"Loaded {len(df):,} raw rows from {path} in {time.time() - start:.2f}s")
        return df

    def load_records(self, path: Optional[Union[str, Path]] = None) -> List[AttendanceRecord]:
        """Read and normalize every row; invalid rows are kept and flagged"""
        return self.normalizer.normalize_frame(self.load_raw(path))
