"""
Command line entry point for the seasonal absence charts.

Usage:
    absence-seasons [options]

Examples:
    # Chart the default "Daily Attendance Trends.csv"
    absence-seasons

    # Chart another file and also save PNGs
    absence-seasons --input-file attendance_2023.csv --png

    # Use custom column spellings from a YAML data config
    absence-seasons --config my_data_config.yaml --log-level DEBUG
"""

import argparse
from pathlib import Path
from typing import List, Optional

from .config import RunnerConfig, create_config_from_data_config, create_config_from_env
from .pipeline import SeasonalAbsencePipeline
from ..data.config.paths import DataConfig
from ..data.exceptions import ConfigurationError
from ..utils.logger import configure_run_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Chart total school absences by season and by flu season",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument("--input-file", help="Attendance CSV to read")
    parser.add_argument("--config", help="YAML data config (input path, output dir, column spellings)")
    parser.add_argument("--output-dir", help="Directory for the chart page and PNGs")
    parser.add_argument("--output-file", help="File name of the chart page (default: season_absences.html)")
    parser.add_argument("--png", action="store_true", help="Also save each chart as a PNG")
    parser.add_argument(
        "--plotlyjs",
        choices=["cdn", "inline"],
        help="Link plotly.js from the CDN or embed it in the page (default: cdn)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)"
    )
    parser.add_argument("--log-file", help="Log file path (default: timestamped file under <output-dir>/logs)")
    return parser


def build_config(args: argparse.Namespace) -> RunnerConfig:
    """Data config YAML, then environment variables, then command line arguments"""
    config = create_config_from_data_config(DataConfig(args.config))
    config = create_config_from_env(config)

    if args.input_file:
        config.input_file = Path(args.input_file)
    if args.output_dir:
        config.output_dir = Path(args.output_dir)
    if args.output_file:
        config.output_file = args.output_file
    if args.png:
        config.export_png = True
    if args.plotlyjs:
        config.include_plotlyjs = args.plotlyjs
    if args.log_level:
        config.log_level = args.log_level
    if args.log_file:
        config.log_file = Path(args.log_file)
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Run the chart pipeline; returns 0 when charts were drawn, 1 otherwise."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
        configure_run_logging(
            "season_absence_charts",
            log_level=config.log_level,
            log_file=str(config.log_file) if config.log_file else None,
            log_dir=str(config.output_dir / "logs")
        )
        # Field spellings from the data config are checked here
        pipeline = SeasonalAbsencePipeline(config)
    except (ConfigurationError, ValueError) as e:
        print(f"❌ Invalid configuration: {e}")
        return 1

    result = pipeline.run()

    if result.ok:
        print(f"\n✅ Charts written to {result.output_path}")
        print(f"   {result.valid_rows:,} of {result.total_rows:,} rows charted")
        for png_path in result.png_paths:
            print(f"   🖼️  {png_path}")
        return 0

    print(f"\n❌ {result.message}")
    print(f"   Status page written to {result.output_path}")
    return 1
