"""
Pipeline decorators for consistent step logging and timing.
"""

import time
import functools
from typing import Callable, Any

from .logger import get_logger


def pipeline_step(step_name: str, step_number: int, total_steps: int):
    """
    Decorator for pipeline steps that handles logging and timing.

    Args:
        step_name: Human-readable name of the step
        step_number: Current step number (1-based)
        total_steps: Total number of steps in the pipeline

    Usage:
        @pipeline_step("Loading data", 1, 4)
        def _load(self):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs) -> Any:
            logger = getattr(self, 'logger', None)
            if logger is None:
                logger = get_logger(__name__)

            logger.log_workflow_step(step_name, step_number, total_steps)

            step_start = time.time()
            try:
                result = func(self, *args, **kwargs)
            except Exception as e:
                step_duration = time.time() - step_start
                logger.error(f"Step '{step_name}' failed after {step_duration:.2f}s: {e}")
                raise

            logger.log_step_completion(f"{step_name} completed", time.time() - step_start)
            return result

        return wrapper
    return decorator
