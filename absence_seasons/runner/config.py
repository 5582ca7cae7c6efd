"""
Configuration settings for the seasonal absence chart runner.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from pathlib import Path
import os

from ..data.config.paths import DataConfig


@dataclass
class RunnerConfig:
    """Configuration for one chart run."""

    # Data paths
    input_file: Path = field(default_factory=lambda: Path("Daily Attendance Trends.csv"))
    data_config_path: Optional[Path] = None  # packaged data_config.yaml if None

    # Output paths
    output_dir: Path = field(default_factory=lambda: Path("output"))
    output_file: str = "season_absences.html"
    season_png_file: str = "season_absences.png"
    flu_png_file: str = "flu_season_absences.png"

    # Rendering settings
    export_png: bool = False
    include_plotlyjs: str = "cdn"  # 'cdn' or 'inline'
    png_dpi: int = 150

    # Logging settings
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    def __post_init__(self):
        """Normalize path fields and check choices."""
        self.input_file = Path(self.input_file)
        self.output_dir = Path(self.output_dir)
        if self.data_config_path is not None:
            self.data_config_path = Path(self.data_config_path)
        if self.log_file is not None:
            self.log_file = Path(self.log_file)

        if self.include_plotlyjs not in ("cdn", "inline"):
            raise ValueError(f"include_plotlyjs must be 'cdn' or 'inline', got {self.include_plotlyjs!r}")

    def get_output_path(self) -> Path:
        """Get the full path of the chart page."""
        return self.output_dir / self.output_file

    def get_season_png_path(self) -> Path:
        return self.output_dir / self.season_png_file

    def get_flu_png_path(self) -> Path:
        return self.output_dir / self.flu_png_file

    def load_data_config(self) -> DataConfig:
        return DataConfig(self.data_config_path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for logging."""
        return {
            'input_file': str(self.input_file),
            'data_config_path': str(self.data_config_path) if self.data_config_path else None,
            'output_path': str(self.get_output_path()),
            'export_png': self.export_png,
            'include_plotlyjs': self.include_plotlyjs,
            'log_level': self.log_level,
            'log_file': str(self.log_file) if self.log_file else None
        }


def create_config_from_data_config(data_config: DataConfig, **overrides) -> RunnerConfig:
    """Create a configuration seeded with the paths of a DataConfig."""
    values = {
        'input_file': data_config.get_input_file_path(),
        'output_dir': data_config.get_output_dir(),
        'data_config_path': data_config.config_path,
    }
    values.update(overrides)
    return RunnerConfig(**values)


def create_config_from_env(config: Optional[RunnerConfig] = None) -> RunnerConfig:
    """Create configuration from environment variables, on top of an optional base config."""
    if config is None:
        config = RunnerConfig()

    # Override with environment variables if present
    if os.getenv('ABSENCE_INPUT_FILE'):
        config.input_file = Path(os.getenv('ABSENCE_INPUT_FILE'))

    if os.getenv('ABSENCE_OUTPUT_DIR'):
        config.output_dir = Path(os.getenv('ABSENCE_OUTPUT_DIR'))

    if os.getenv('ABSENCE_LOG_LEVEL'):
        config.log_level = os.getenv('ABSENCE_LOG_LEVEL').upper()

    if os.getenv('ABSENCE_EXPORT_PNG'):
        config.export_png = os.getenv('ABSENCE_EXPORT_PNG').lower() in ('1', 'true', 'yes')

    return config
