"""
Visualization module for seasonal absence aggregates.
Renders bar charts with hover tooltips to a static HTML page, with an
optional PNG export per chart.
"""

import html
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter, MultipleLocator
import seaborn as sns
import plotly.graph_objs as go

from ..data.aggregator import AggregateResult, SeasonalSummary

logger = logging.getLogger(__name__)

SEASON_CHART_TITLE = "Total Absences by Season"
FLU_CHART_TITLE = "Absences: Flu Season vs Non-Flu Season"

BAR_COLOR = "#3b82f6"


@dataclass(frozen=True)
class ChartGeometry:
    """Shared pixel geometry and value-axis scaling for every bar chart"""
    width: int = 600
    height: int = 340
    margin_top: int = 64
    margin_right: int = 32
    margin_bottom: int = 56
    margin_left: int = 96
    tick_count: int = 8
    headroom: float = 1.15

    @property
    def margin(self) -> dict:
        return dict(t=self.margin_top, r=self.margin_right,
                    b=self.margin_bottom, l=self.margin_left)


@dataclass(frozen=True)
class TooltipStyle:
    """Hover tooltip appearance, passed into each chart draw call"""
    background: str = "rgba(15,23,42,.92)"
    font_color: str = "#fff"
    font_size: int = 12
    border_color: str = "rgba(15,23,42,.92)"

    def to_hoverlabel(self) -> dict:
        return dict(
            bgcolor=self.background,
            bordercolor=self.border_color,
            font=dict(color=self.font_color, size=self.font_size),
            align="left",
        )


def format_count(value: Union[int, float]) -> str:
    """Format a count with thousands separators, dropping a zero fraction"""
    value = float(value)
    if value.is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}".rstrip("0").rstrip(".")


def nice_step(span: float, tick_count: int = 8) -> float:
    """Smallest 1/2/5 x 10^n step that covers span in at most tick_count ticks"""
    if span <= 0:
        return 1.0
    raw_step = span / tick_count
    magnitude = 10 ** np.floor(np.log10(raw_step))
    for multiple in (1, 2, 5, 10):
        step = multiple * magnitude
        if step >= raw_step:
            return float(step)
    return float(10 * magnitude)


def value_axis(values: Sequence[float], geometry: ChartGeometry) -> Tuple[float, float, float]:
    """
    Compute a rounded value-axis range with headroom above the tallest bar.

    Returns:
        (lower, upper, step) where upper >= max(values) * headroom and both
        bounds sit on a multiple of step
    """
    top = max(max(values, default=0), 0) * geometry.headroom
    bottom = min(min(values, default=0), 0) * geometry.headroom
    if top == bottom:
        top = 1.0
    step = nice_step(top - bottom, geometry.tick_count)
    upper = float(np.ceil(top / step) * step)
    lower = float(np.floor(bottom / step) * step)
    return lower, upper, step


class ChartRenderer:
    """
    Draws absence aggregates as bar charts.

    One TooltipStyle is owned by each renderer and handed to every
    chart it builds.
    """

    def __init__(self, geometry: Optional[ChartGeometry] = None,
                 tooltip: Optional[TooltipStyle] = None,
                 include_plotlyjs: Union[str, bool] = "cdn"):
        """
        Args:
            geometry: Chart size, margins and axis scaling
            tooltip: Hover label style shared by the charts of this renderer
            include_plotlyjs: 'cdn' to link plotly.js, True/'inline' to embed it
        """
        self.geometry = geometry or ChartGeometry()
        self.tooltip = tooltip or TooltipStyle()
        self.include_plotlyjs = True if include_plotlyjs == "inline" else include_plotlyjs

    def build_bar_chart(self, pairs: Sequence[Tuple[str, Union[int, float]]], title: str,
                        tooltip: TooltipStyle, bar_padding: float = 0.15) -> go.Figure:
        """
        Build one bar chart.

        Args:
            pairs: Ordered (label, value) pairs; categories keep this order
            title: Chart title
            tooltip: Hover label style
            bar_padding: Fraction of each band left empty between bars

        Returns:
            Plotly figure
        """
        labels = [label for label, _ in pairs]
        values = [value for _, value in pairs]
        texts = [format_count(value) for value in values]
        lower, upper, step = value_axis(values, self.geometry)
        tick_values = np.arange(lower, upper + step / 2, step).tolist()

        fig = go.Figure()
        fig.add_trace(go.Bar(
            x=labels,
            y=values,
            text=texts,
            textposition="outside",
            cliponaxis=False,
            marker_color=BAR_COLOR,
            customdata=texts,
            hovertemplate="<b>%{x}</b><br>Absences: %{customdata}<extra></extra>",
            hoverlabel=tooltip.to_hoverlabel(),
        ))

        fig.update_layout(
            title=dict(text=title, x=0.5, xanchor="center"),
            width=self.geometry.width,
            height=self.geometry.height,
            margin=self.geometry.margin,
            showlegend=False,
            template="plotly_white",
            bargap=bar_padding,
            xaxis=dict(type="category", categoryorder="array", categoryarray=labels),
            yaxis=dict(
                range=[lower, upper],
                tickmode="array",
                tickvals=tick_values,
                ticktext=[format_count(v) for v in tick_values],
            ),
        )
        return fig

    def build_charts(self, summary: SeasonalSummary) -> List[Tuple[str, go.Figure]]:
        """Build the season and flu-season charts keyed by their page region id"""
        return [
            ("histogram", self.build_bar_chart(
                summary.by_season.to_pairs(), SEASON_CHART_TITLE, self.tooltip, bar_padding=0.15)),
            ("bar-chart", self.build_bar_chart(
                summary.by_flu_season.to_pairs(), FLU_CHART_TITLE, self.tooltip, bar_padding=0.25)),
        ]

    def render_page(self, summary: Optional[SeasonalSummary], output_path: Union[str, Path],
                    status_message: Optional[str] = None) -> Path:
        """
        Write the chart page.

        Args:
            summary: Aggregates to draw; None draws no chart
            output_path: HTML file to write
            status_message: Text for the status area, if any

        Returns:
            Path of the written page
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        regions = {"histogram": "", "bar-chart": ""}
        if summary is not None:
            include_js = self.include_plotlyjs
            for region_id, fig in self.build_charts(summary):
                regions[region_id] = fig.to_html(
                    full_html=False,
                    include_plotlyjs=include_js,
                    div_id=f"{region_id}-plot",
                    config={"displayModeBar": False},
                )
                include_js = False

        page = PAGE_TEMPLATE.format(
            status_class="status" if status_message else "status hidden",
            status_message=html.escape(status_message or ""),
            histogram=regions["histogram"],
            bar_chart=regions["bar-chart"],
        )
        output_path.write_text(page, encoding="utf-8")
        logger.info(f"Chart page written to {output_path}")
        return output_path

    def export_static_chart(self, result: AggregateResult, title: str,
                            filename: Union[str, Path], dpi: int = 150) -> Path:
        """
        Save one aggregate as a PNG bar chart.

        Args:
            result: Aggregate to draw
            title: Chart title
            filename: Output filename
            dpi: Resolution for saving
        """
        pairs = result.to_pairs()
        labels = [label for label, _ in pairs]
        values = [value for _, value in pairs]
        lower, upper, step = value_axis(values, self.geometry)

        plt.style.use("seaborn-v0_8")
        fig, ax = plt.subplots(figsize=(self.geometry.width / 100, self.geometry.height / 100))
        try:
            sns.barplot(x=labels, y=values, order=labels, color=BAR_COLOR, ax=ax)
            for index, value in enumerate(values):
                ax.text(index, value, format_count(value), ha="center", va="bottom", fontsize=9)

            ax.set_ylim(lower, upper)
            ax.yaxis.set_major_locator(MultipleLocator(step))
            ax.yaxis.set_major_formatter(FuncFormatter(lambda v, _: format_count(v)))
            ax.set_title(title)
            ax.set_xlabel("")
            ax.set_ylabel("Absences")
            ax.grid(True, axis="y", alpha=0.3)
            plt.tight_layout()

            filename = Path(filename)
            filename.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(filename, dpi=dpi, bbox_inches="tight")
        finally:
            plt.close(fig)

        logger.info(f"Plot saved as {filename}")
        return filename


PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Student Absenteeism by Season</title>
<style>
  body{{font-family:'Segoe UI',Arial,sans-serif;background:#f8fafc;color:#0f172a;margin:0}}
  .container{{max-width:1280px;margin:0 auto;padding:24px}}
  h1{{font-size:22px;margin:0 0 16px}}
  .status{{background:#fff7ed;border:1px solid #f59e0b;border-radius:8px;padding:12px 16px;margin-bottom:16px;color:#92400e}}
  .hidden{{display:none}}
  .charts{{display:flex;flex-wrap:wrap;gap:16px}}
  .chart{{background:#fff;border:1px solid #e2e8f0;border-radius:12px;padding:8px}}
  .chart:empty{{display:none}}
</style>
</head>
<body>
<div class="container">
  <h1>Student Absenteeism by Season</h1>
  <div id="status-message" class="{status_class}">{status_message}</div>
  <div class="charts">
    <div id="histogram" class="chart">{histogram}</div>
    <div id="bar-chart" class="chart">{bar_chart}</div>
  </div>
</div>
</body>
</html>
"""
