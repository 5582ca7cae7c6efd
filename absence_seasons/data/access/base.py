"""
Base classes for attendance source access.
"""

from abc import ABC, abstractmethod
import pandas as pd
from typing import Optional, Union, List, Dict, Any
from pathlib import Path

class DataAccessor(ABC):
    """Abstract base class for read-only attendance sources"""
    
    @abstractmethod
    def read_data(self, 
                  path: Union[str, Path], 
                  columns: Optional[List[str]] = None,
                  **kwargs) -> pd.DataFrame:
        """
        Read raw rows from the source
        
        Args:
            path: Path to data source
            columns: Optional list of columns to read
            **kwargs: Additional arguments for specific implementations
            
        Returns:
            DataFrame of raw, untyped rows
        """
        pass
    
    @abstractmethod
    def validate_source(self, path: Union[str, Path]) -> bool:
        """
        Check that the source exists and is readable
        
        Returns:
            True if the source can be read, False otherwise
        """
        pass
    
    @abstractmethod
    def get_data_info(self, path: Union[str, Path]) -> Dict[str, Any]:
        """
        Get metadata about the data source
        
        Args:
            path: Path to data source
            
        Returns:
            Dictionary containing metadata (size, modification time, etc.)
        """
        pass
