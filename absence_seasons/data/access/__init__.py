"""Source accessors for attendance data."""

from .base import DataAccessor
from .csv_accessor import CSVAccessor
from .access_and_storage import get_accessor

__all__ = ['DataAccessor', 'CSVAccessor', 'get_accessor']
