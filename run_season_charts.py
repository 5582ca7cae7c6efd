#!/usr/bin/env python3
"""
Seasonal Absence Chart Runner

Reads a daily attendance CSV and writes an HTML page with two bar charts:
total absences by season, and flu season vs non-flu season.

Usage:
    python run_season_charts.py [options]

Examples:
    # Run with default settings
    python run_season_charts.py

    # Chart a specific file and save PNG copies of the charts
    python run_season_charts.py --input-file "Daily Attendance Trends.csv" --png
"""

import sys

from absence_seasons.runner.cli import main


if __name__ == "__main__":
    sys.exit(main())
