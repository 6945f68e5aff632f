import logging

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

logger = logging.getLogger(__name__)


def build_airline_totals_figure(summary: pd.DataFrame) -> go.Figure:
    """Bar chart of total scheduled hours per airline, from kpis.airline_summary."""
    fig = go.Figure()

    fig.add_trace(go.Bar(
        x=summary['airline'],
        y=summary['total_hours'],
        name='Total Hours',
        marker_color='indianred'
    ))

    fig.update_layout(
        title_text='<b>Total Scheduled Flight Time by Airline</b>',
        xaxis_title='Airline',
        yaxis_title='Hours',
        template='plotly_white'
    )
    return fig


def build_duration_vs_volume_figure(summary: pd.DataFrame) -> go.Figure:
    """Flights per airline (bars) against their average duration (line)."""
    fig = make_subplots(specs=[[{"secondary_y": True}]])

    fig.add_trace(
        go.Bar(
            x=summary['airline'],
            y=summary['total_flights'],
            name='Flights',
            marker_color='lightblue'
        ),
        secondary_y=False,
    )
    fig.add_trace(
        go.Scatter(
            x=summary['airline'],
            y=summary['average_minutes'],
            name='Avg. Duration',
            mode='lines+markers',
            line=dict(color='firebrick', width=2)
        ),
        secondary_y=True,
    )

    fig.update_layout(
        title_text='<b>Average Duration vs. Flight Volume by Airline</b>',
        xaxis_title='Airline',
        template='plotly_white',
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1)
    )
    fig.update_yaxes(title_text="Number of Flights", secondary_y=False)
    fig.update_yaxes(title_text="Average Duration (Minutes)", secondary_y=True)
    return fig


def plot_airline_totals(summary: pd.DataFrame, output_path: str):
    """
    Creates and saves an interactive bar chart of flight time per airline.

    Args:
        summary: DataFrame returned by kpis.airline_summary.
        output_path: Path to save the HTML file for the plot.
    """
    fig = build_airline_totals_figure(summary)
    fig.write_html(output_path)
    logger.info("Saved airline totals plot to %s", output_path)


def plot_duration_vs_volume(summary: pd.DataFrame, output_path: str):
    """
    Creates and saves a combo chart of average duration vs. flight count per airline.

    Args:
        summary: DataFrame returned by kpis.airline_summary.
        output_path: Path to save the HTML file for the plot.
    """
    fig = build_duration_vs_volume_figure(summary)
    fig.write_html(output_path)
    logger.info("Saved duration vs. volume plot to %s", output_path)
