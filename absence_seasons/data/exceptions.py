"""
Custom exceptions for attendance data loading and aggregation.
"""

class DataAccessError(Exception):
    """Base exception for data access errors"""
    pass

class SourceUnavailableError(DataAccessError):
    """Raised when the attendance source cannot be loaded or read at all"""
    pass

class EmptyDatasetError(Exception):
    """Raised when no rows survive date validation"""
    pass

class ConfigurationError(Exception):
    """Raised when a data configuration file is missing or malformed"""
    pass
