"""
Absence aggregation utilities.
Sums absences into calendar-season and flu-season buckets.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple, Union

import pandas as pd

from .exceptions import EmptyDatasetError
from .normalizer import valid_records
from .schema import AttendanceRecord

logger = logging.getLogger(__name__)

Number = Union[int, float]

# Fixed month table; every month 1-12 belongs to exactly one season
SEASON_MONTHS: Dict[str, Tuple[int, ...]] = {
    'spring': (3, 4, 5),
    'summer': (6, 7, 8),
    'fall': (9, 10, 11),
    'winter': (12, 1, 2),
}
SEASON_LABELS: Dict[str, str] = {
    'spring': 'Spring',
    'summer': 'Summer',
    'fall': 'Fall',
    'winter': 'Winter',
}

FLU_SEASONS = ('fall', 'winter')
FLU_BUCKET_LABELS: Dict[str, str] = {
    'flu_season': 'Flu Season',
    'non_flu_season': 'Non-Flu Season',
}

_MONTH_TO_SEASON = {month: season for season, months in SEASON_MONTHS.items() for month in months}


def season_for_month(month: int) -> str:
    """Return the season key for a 1-based calendar month"""
    try:
        return _MONTH_TO_SEASON[month]
    except KeyError:
        raise ValueError(f"Month must be in 1..12, got {month!r}") from None


def flu_bucket_for_month(month: int) -> str:
    """Return 'flu_season' for fall/winter months, 'non_flu_season' otherwise"""
    return 'flu_season' if season_for_month(month) in FLU_SEASONS else 'non_flu_season'


def _as_count(value) -> Number:
    value = float(value)
    return int(value) if value.is_integer() else value


@dataclass(frozen=True)
class AggregateResult:
    """Ordered bucket -> summed absences mapping for one grouping"""
    name: str
    keys: Tuple[str, ...]
    labels: Tuple[str, ...]
    values: Tuple[Number, ...]

    def __post_init__(self):
        if not (len(self.keys) == len(self.labels) == len(self.values)):
            raise ValueError("keys, labels and values must have the same length")

    def __getitem__(self, key: str) -> Number:
        return self.as_dict()[key]

    def __len__(self) -> int:
        return len(self.keys)

    def as_dict(self) -> Dict[str, Number]:
        return dict(zip(self.keys, self.values))

    def to_pairs(self) -> List[Tuple[str, Number]]:
        """(display label, value) pairs in bucket order, as consumed by the renderer"""
        return list(zip(self.labels, self.values))

    @property
    def total(self) -> Number:
        return _as_count(sum(self.values))

    @property
    def max_value(self) -> Number:
        return max(self.values) if self.values else 0

    def combine(self, other: 'AggregateResult') -> 'AggregateResult':
        """Add another partial result of the same grouping bucket-wise"""
        if self.keys != other.keys:
            raise ValueError(f"Cannot combine '{self.name}' with '{other.name}': bucket keys differ")
        return AggregateResult(
            name=self.name,
            keys=self.keys,
            labels=self.labels,
            values=tuple(_as_count(a + b) for a, b in zip(self.values, other.values)),
        )

    @classmethod
    def from_series(cls, name: str, series: pd.Series, labels: Dict[str, str]) -> 'AggregateResult':
        """Build from a bucket-indexed Series, keeping the order of ``labels``"""
        ordered = series.reindex(list(labels), fill_value=0)
        return cls(
            name=name,
            keys=tuple(labels),
            labels=tuple(labels.values()),
            values=tuple(_as_count(v) for v in ordered.tolist()),
        )


@dataclass(frozen=True)
class SeasonalSummary:
    """Both aggregates produced by one aggregation pass"""
    by_season: AggregateResult
    by_flu_season: AggregateResult
    record_count: int

    @property
    def total_absences(self) -> Number:
        return self.by_season.total


class SeasonAggregator:
    """Aggregates absences by season and by flu season"""

    def aggregate(self, records: Iterable[AttendanceRecord]) -> SeasonalSummary:
        """
        Sum absences per season and per flu bucket.

        Records without a valid date are ignored.

        Args:
            records: Normalized attendance records

        Returns:
            SeasonalSummary with all four seasons and both flu buckets present

        Raises:
            EmptyDatasetError: If no valid record is supplied
        """
        usable = valid_records(records)
        if not usable:
            raise EmptyDatasetError("No valid attendance records to aggregate")

        frame = self.to_frame(usable)
        by_season = frame.groupby('season')['absent'].sum()
        by_flu = frame.groupby('flu_bucket')['absent'].sum()

        summary = SeasonalSummary(
            by_season=AggregateResult.from_series('season', by_season, SEASON_LABELS),
            by_flu_season=AggregateResult.from_series('flu_season', by_flu, FLU_BUCKET_LABELS),
            record_count=len(usable),
        )

        logger.info(
            f"Aggregated {summary.record_count:,} records: "
            f"{summary.total_absences:,} total absences"
        )
        logger.debug(f"Season totals: {summary.by_season.as_dict()}")
        logger.debug(f"Flu season totals: {summary.by_flu_season.as_dict()}")
        return summary

    @staticmethod
    def to_frame(records: List[AttendanceRecord]) -> pd.DataFrame:
        """Tabulate valid records with their month, season and flu bucket"""
        frame = pd.DataFrame({
            'month': [record.date.month for record in records],
            'absent': [record.absent for record in records],
        })
        frame['season'] = frame['month'].map(season_for_month)
        frame['flu_bucket'] = frame['month'].map(flu_bucket_for_month)
        return frame

    def get_aggregation_summary(self, records: Iterable[AttendanceRecord]) -> Dict:
        """
        Get summary statistics for an aggregation pass

        Returns:
            Dictionary with record counts, date range and bucket totals.
            Empty input yields zero counts and no bucket totals.
        """
        records = list(records)
        usable = valid_records(records)
        if not usable:
            return {
                'total_records': len(records),
                'valid_records': 0,
                'dropped_records': len(records),
                'total_absences': 0,
                'by_season': None,
                'by_flu_season': None
            }

        summary = self.aggregate(usable)
        dates = [record.date for record in usable]
        return {
            'total_records': len(records),
            'valid_records': summary.record_count,
            'dropped_records': len(records) - summary.record_count,
            'total_absences': summary.total_absences,
            'date_range': {
                'start': min(dates).isoformat(),
                'end': max(dates).isoformat()
            },
            'by_season': summary.by_season.as_dict(),
            'by_flu_season': summary.by_flu_season.as_dict()
        }


def aggregate_absences(records: Iterable[AttendanceRecord]) -> SeasonalSummary:
    """Quick function to aggregate absences by season and flu season"""
    aggregator = SeasonAggregator()
    return aggregator.aggregate(records)


def get_aggregation_summary(records: Iterable[AttendanceRecord]) -> Dict:
    """Quick function to get aggregation summary"""
    aggregator = SeasonAggregator()
    return aggregator.get_aggregation_summary(records)
