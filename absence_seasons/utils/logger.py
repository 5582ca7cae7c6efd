"""
Standardized logging utilities for the absence_seasons package.
Provides consistent console/file logging and step tracking for chart runs.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Dict, Any
from datetime import datetime


class AbsenceLogger:
    """
    Centralized logging for the absence_seasons package.

    Features:
    - Named loggers sharing one global configuration
    - Run step tracking with timing
    - Console and rotating file output
    """

    # Global configuration
    _global_config: Dict[str, Any] = {
        'level': 'INFO',
        'log_file': None,
        'console_output': True,
        'file_output': True,
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'date_format': '%Y-%m-%d %H:%M:%S',
        'max_file_size': 10 * 1024 * 1024,  # 10MB
        'backup_count': 5
    }

    # Registry of all loggers
    _loggers: Dict[str, 'AbsenceLogger'] = {}

    def __init__(self, name: str, level: str = None, log_file: Optional[str] = None):
        """
        Initialize the logger

        Args:
            name: Logger name (usually __name__)
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Optional file path for logging
        """
        self.name = name
        self.logger = logging.getLogger(name)
        self._level = level
        self._log_file = log_file
        self._configure_handlers()

        # Handlers live on this logger; don't duplicate through the root
        self.logger.propagate = False

        AbsenceLogger._loggers[name] = self

    def _configure_handlers(self):
        """(Re)create handlers from the instance overrides and global config"""
        level = self._level or self._global_config['level']
        log_file = self._log_file or self._global_config['log_file']

        self.logger.setLevel(getattr(logging, level.upper()))
        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()

        formatter = _build_formatter()

        if self._global_config['console_output']:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if self._global_config['file_output'] and log_file:
            self.logger.addHandler(_build_file_handler(log_file, formatter))

    # Standard logging methods
    def debug(self, message: str):
        self.logger.debug(message)

    def info(self, message: str):
        self.logger.info(message)

    def warning(self, message: str):
        self.logger.warning(message)

    def error(self, message: str):
        self.logger.error(message)

    def critical(self, message: str):
        self.logger.critical(message)

    # Run-specific logging methods
    def log_workflow_step(self, step_name: str, step_number: int, total_steps: int,
                         description: str = ""):
        """Log run step information"""
        message = f"Step {step_number}/{total_steps}: {step_name}"
        if description:
            message += f" - {description}"
        self.info(message)

    def log_step_completion(self, step_name: str, duration: float,
                           details: Dict[str, Any] = None):
        """Log step completion with timing and details"""
        message = f"✅ {step_name} in {duration:.2f}s"
        if details:
            detail_str = ", ".join([f"{k}: {v}" for k, v in details.items()])
            message += f" - {detail_str}"
        self.info(message)

    def log_data_loading(self, filename: str, record_count: int, valid_count: int):
        """Log how many rows were read and how many survived date validation"""
        self.info(f"📂 Loaded {record_count:,} rows from {filename} ({valid_count:,} with a valid date)")
        dropped = record_count - valid_count
        if dropped:
            self.warning(f"⚠️ Dropped {dropped:,} rows with a missing or unparseable date")

    def log_error_with_context(self, error: Exception, context: str = ""):
        """Log error with context information"""
        message = f"❌ Error in {context}: {str(error)}" if context else f"❌ Error: {str(error)}"
        self.error(message)

    # Configuration methods
    @classmethod
    def configure_global(cls, **kwargs):
        """Configure global logging settings and refresh existing loggers"""
        cls._global_config.update(kwargs)

        for logger in cls._loggers.values():
            logger._configure_handlers()


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        AbsenceLogger._global_config['format'],
        datefmt=AbsenceLogger._global_config['date_format']
    )


def _build_file_handler(log_file: str, formatter: logging.Formatter) -> logging.Handler:
    """Setup rotating file handler"""
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=AbsenceLogger._global_config['max_file_size'],
        backupCount=AbsenceLogger._global_config['backup_count']
    )
    file_handler.setFormatter(formatter)
    return file_handler


def get_logger(name: str = None, level: str = None,
               log_file: Optional[str] = None) -> AbsenceLogger:
    """
    Get or create a logger instance

    Args:
        name: Logger name (defaults to 'absence_seasons')
        level: Logging level
        log_file: Optional log file path

    Returns:
        AbsenceLogger instance
    """
    if name is None:
        name = "absence_seasons"

    if name in AbsenceLogger._loggers:
        return AbsenceLogger._loggers[name]

    return AbsenceLogger(name, level, log_file)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None,
                  console_output: bool = True, file_output: bool = True):
    """
    Setup global logging configuration

    Configures both the AbsenceLogger registry and the root logger, so
    plain ``logging.getLogger(__name__)`` module loggers follow the same
    level and handlers.

    Args:
        level: Logging level
        log_file: Optional log file path
        console_output: Enable console output
        file_output: Enable file output
    """
    AbsenceLogger.configure_global(
        level=level,
        log_file=str(log_file) if log_file else None,
        console_output=console_output,
        file_output=file_output
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()

    formatter = _build_formatter()

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if file_output and log_file:
        root_logger.addHandler(_build_file_handler(str(log_file), formatter))


def configure_run_logging(run_name: str, log_level: str = "INFO",
                          log_file: Optional[str] = None,
                          log_dir: str = "output/logs") -> AbsenceLogger:
    """
    Configure logging for one chart run

    Args:
        run_name: Name of the run, used in the default log file name
        log_level: Logging level
        log_file: Explicit log file; a timestamped file in log_dir if None
        log_dir: Directory for the default log file
    """
    if log_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = f"{log_dir}/{run_name}_{timestamp}.log"

    setup_logging(
        level=log_level,
        log_file=log_file,
        console_output=True,
        file_output=True
    )

    logger = get_logger("absence_seasons.run")
    logger.info(f"🚀 {run_name} started")
    logger.info(f"📝 Log file: {log_file}")
    logger.info(f"🔧 Log level: {log_level}")

    return logger
