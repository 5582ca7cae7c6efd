"""
Factory function for creating data accessors.
"""

from .base import DataAccessor
from .csv_accessor import CSVAccessor
from ..exceptions import DataAccessError


def get_accessor(storage_type: str) -> DataAccessor:
    """
    Factory function to get the appropriate data accessor.
    
    Args:
        storage_type: Type of storage (only 'csv' is supported)
        
    Returns:
        DataAccessor instance
        
    Raises:
        DataAccessError: If storage type is not supported
    """
    if storage_type == 'csv':
        return CSVAccessor()
    else:
        raise DataAccessError(f"Unsupported storage type: {storage_type}")
