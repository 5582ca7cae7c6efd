"""
Data module for the absence_seasons package.

This module handles loading, normalizing and aggregating attendance data.
"""

from .exceptions import DataAccessError, SourceUnavailableError, EmptyDatasetError, ConfigurationError
from .schema import AttendanceRecord
from .normalizer import RowNormalizer, normalize_row, parse_date_flexible, to_number, valid_records
from .aggregator import (
    SeasonAggregator,
    AggregateResult,
    SeasonalSummary,
    aggregate_absences,
    get_aggregation_summary,
    season_for_month,
    flu_bucket_for_month
)
from .loader import AttendanceLoader

__all__ = [
    'DataAccessError',
    'SourceUnavailableError',
    'EmptyDatasetError',
    'ConfigurationError',
    'AttendanceRecord',
    'RowNormalizer',
    'normalize_row',
    'parse_date_flexible',
    'to_number',
    'valid_records',
    'SeasonAggregator',
    'AggregateResult',
    'SeasonalSummary',
    'aggregate_absences',
    'get_aggregation_summary',
    'season_for_month',
    'flu_bucket_for_month',
    'AttendanceLoader'
]
