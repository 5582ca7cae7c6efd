"""
Main pipeline for producing the seasonal absence charts.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from .config import RunnerConfig
from ..data.aggregator import SeasonAggregator, SeasonalSummary
from ..data.exceptions import EmptyDatasetError, SourceUnavailableError
from ..data.loader import AttendanceLoader
from ..data.normalizer import valid_records
from ..data.schema import AttendanceRecord
from ..utils.logger import AbsenceLogger
from ..utils.pipeline_decorators import pipeline_step
from ..utils.visualization import ChartRenderer, SEASON_CHART_TITLE, FLU_CHART_TITLE

EMPTY_DATASET_MESSAGE = "No valid data found. Verify CSV filename, headers, and date format."
SOURCE_UNAVAILABLE_MESSAGE = (
    "Failed to load CSV. Check the CSV filename/path and that the file is readable."
)

TOTAL_STEPS = 4


class RunStatus(Enum):
    """Terminal state of a chart run"""
    OK = "ok"
    EMPTY_DATASET = "empty_dataset"
    SOURCE_UNAVAILABLE = "source_unavailable"


@dataclass
class PipelineResult:
    """Outcome of one chart run"""
    status: RunStatus
    output_path: Optional[Path]
    message: Optional[str] = None
    summary: Optional[SeasonalSummary] = None
    total_rows: int = 0
    valid_rows: int = 0
    png_paths: List[Path] = field(default_factory=list)
    execution_time: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status is RunStatus.OK

    def to_dict(self) -> Dict[str, Any]:
        return {
            'status': self.status.value,
            'message': self.message,
            'output_path': str(self.output_path) if self.output_path else None,
            'total_rows': self.total_rows,
            'valid_rows': self.valid_rows,
            'by_season': self.summary.by_season.as_dict() if self.summary else None,
            'by_flu_season': self.summary.by_flu_season.as_dict() if self.summary else None,
            'png_paths': [str(p) for p in self.png_paths],
            'execution_time': round(self.execution_time, 3)
        }


class SeasonalAbsencePipeline:
    """Loads attendance data, aggregates absences and renders the chart page."""

    def __init__(self, config: RunnerConfig,
                 loader: Optional[AttendanceLoader] = None,
                 renderer: Optional[ChartRenderer] = None):
        self.config = config
        self.logger = AbsenceLogger(__name__, config.log_level,
                                    str(config.log_file) if config.log_file else None)
        self.loader = loader or AttendanceLoader(config.load_data_config())
        self.aggregator = SeasonAggregator()
        self.renderer = renderer or ChartRenderer(include_plotlyjs=config.include_plotlyjs)

        self.raw_data: Optional[pd.DataFrame] = None
        self.records: List[AttendanceRecord] = []
        self.summary: Optional[SeasonalSummary] = None

    def run(self) -> PipelineResult:
        """
        Run the chart pipeline.

        A missing/unreadable source or an input without valid rows does not
        raise; the page is written with a status message instead.

        Returns:
            PipelineResult describing the outcome
        """
        start_time = time.time()
        self.logger.info("Starting seasonal absence chart run")
        self.logger.info(f"Configuration: {self.config.to_dict()}")

        try:
            self._load_data()
            self._normalize_records()
            self._aggregate()
        except SourceUnavailableError as e:
            self.logger.log_error_with_context(e, "loading attendance data")
            return self._finish_with_status(RunStatus.SOURCE_UNAVAILABLE, SOURCE_UNAVAILABLE_MESSAGE, start_time)
        except EmptyDatasetError as e:
            self.logger.log_error_with_context(e, "aggregating attendance data")
            return self._finish_with_status(RunStatus.EMPTY_DATASET, EMPTY_DATASET_MESSAGE, start_time)

        png_paths = self._render()

        result = PipelineResult(
            status=RunStatus.OK,
            output_path=self.config.get_output_path(),
            summary=self.summary,
            total_rows=len(self.records),
            valid_rows=self.summary.record_count,
            png_paths=png_paths,
            execution_time=time.time() - start_time
        )
        self.logger.info("Seasonal absence chart run completed successfully")
        self.logger.info(f"Total execution time: {result.execution_time:.2f} seconds")
        return result

    @pipeline_step("Loading attendance data", 1, TOTAL_STEPS)
    def _load_data(self):
        self.raw_data = self.loader.load_raw(self.config.input_file)

    @pipeline_step("Normalizing rows", 2, TOTAL_STEPS)
    def _normalize_records(self):
        self.records = self.loader.normalizer.normalize_frame(self.raw_data)
        self.logger.log_data_loading(
            str(self.config.input_file), len(self.records), len(valid_records(self.records))
        )

    @pipeline_step("Aggregating absences by season", 3, TOTAL_STEPS)
    def _aggregate(self):
        self.summary = self.aggregator.aggregate(self.records)
        self.logger.info(f"By season: {self.summary.by_season.as_dict()}")
        self.logger.info(f"By flu season: {self.summary.by_flu_season.as_dict()}")

    @pipeline_step("Rendering charts", 4, TOTAL_STEPS)
    def _render(self) -> List[Path]:
        self.renderer.render_page(self.summary, self.config.get_output_path())

        png_paths = []
        if self.config.export_png:
            png_paths.append(self.renderer.export_static_chart(
                self.summary.by_season, SEASON_CHART_TITLE,
                self.config.get_season_png_path(), dpi=self.config.png_dpi))
            png_paths.append(self.renderer.export_static_chart(
                self.summary.by_flu_season, FLU_CHART_TITLE,
                self.config.get_flu_png_path(), dpi=self.config.png_dpi))
        return png_paths

    def _finish_with_status(self, status: RunStatus, message: str, start_time: float) -> PipelineResult:
        """Write the status-only page for a run that produced no charts"""
        self.logger.warning(message)
        output_path = self.renderer.render_page(None, self.config.get_output_path(), status_message=message)
        return PipelineResult(
            status=status,
            output_path=output_path,
            message=message,
            total_rows=len(self.records),
            valid_rows=0,
            execution_time=time.time() - start_time
        )


def run_pipeline(config: Optional[RunnerConfig] = None) -> PipelineResult:
    """
    Convenience function to run the chart pipeline.

    Args:
        config: Run configuration (uses default if None)

    Returns:
        Pipeline result
    """
    if config is None:
        config = RunnerConfig()

    pipeline = SeasonalAbsencePipeline(config)
    return pipeline.run()
