"""
CSV file accessor for raw attendance rows.
"""

import pandas as pd
from pathlib import Path
from typing import Optional, Union, List, Dict, Any
import os
from datetime import datetime
import logging
from ..exceptions import SourceUnavailableError
from .base import DataAccessor

logger = logging.getLogger(__name__)

class CSVAccessor(DataAccessor):
    """CSV accessor that keeps every cell as the raw string found in the file"""
    
    def read_data(self, 
                  path: Union[str, Path], 
                  columns: Optional[List[str]] = None,
                  **kwargs) -> pd.DataFrame:
        """Read CSV rows as strings; empty cells stay empty strings"""
        path = Path(path)
        
        if not path.exists():
            raise SourceUnavailableError(f"File not found: {path}")
        
        try:
            read_kwargs = {
                'dtype': str,
                'keep_default_na': False,
                'encoding_errors': 'replace'
            }
            if columns:
                read_kwargs['usecols'] = lambda c: c in columns
            read_kwargs.update(kwargs)
            
            logger.debug(f"Reading CSV file: {path}")
            df = pd.read_csv(path, **read_kwargs)
            
            logger.info(f"Successfully read {len(df)} rows from {path}")
            return df
            
        except pd.errors.EmptyDataError:
            # Header-less empty file: loaded fine, just has no rows
            logger.warning(f"CSV file {path} is empty")
            return pd.DataFrame()
        except Exception as e:
            logger.error(f"Error reading {path}: {e}")
            raise SourceUnavailableError(f"Error reading {path}: {str(e)}") from e
    
    def validate_source(self, path: Union[str, Path]) -> bool:
        """Validate that the CSV file exists and can be opened"""
        path = Path(path)
        try:
            with open(path, 'rb'):
                pass
            return path.is_file()
        except OSError as e:
            logger.error(f"Source validation failed for {path}: {e}")
            return False
    
    def get_data_info(self, path: Union[str, Path]) -> Dict[str, Any]:
        """Get file metadata"""
        path = Path(path)
        try:
            return {
                'size': os.path.getsize(path),
                'modified': datetime.fromtimestamp(os.path.getmtime(path))
            }
        except OSError as e:
            logger.error(f"Error getting file info for {path}: {e}")
            return {}
