"""
Utility modules for the absence_seasons package.
"""

from .logger import (
    AbsenceLogger,
    get_logger,
    setup_logging,
    configure_run_logging
)
from .pipeline_decorators import pipeline_step
from .visualization import ChartRenderer, ChartGeometry, TooltipStyle, format_count

__all__ = [
    'AbsenceLogger',
    'get_logger',
    'setup_logging',
    'configure_run_logging',
    'pipeline_step',
    'ChartRenderer',
    'ChartGeometry',
    'TooltipStyle',
    'format_count'
]
