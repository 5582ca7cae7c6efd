"""
Runner module for orchestrating the chart pipeline.
"""

from .config import RunnerConfig, create_config_from_env, create_config_from_data_config
from .pipeline import SeasonalAbsencePipeline, PipelineResult, RunStatus, run_pipeline

__all__ = [
    'RunnerConfig',
    'create_config_from_env',
    'create_config_from_data_config',
    'SeasonalAbsencePipeline',
    'PipelineResult',
    'RunStatus',
    'run_pipeline'
]
