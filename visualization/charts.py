"""Plotly chart builders for the Stockroom dashboard."""

from __future__ import annotations

import plotly.express as px
import plotly.graph_objects as go

from core.models import CategoryResult, TrendResult

from .theme import Theme, ThemeTokens, theme_tokens

__all__ = [
    "build_trend_chart",
    "build_category_cost_chart",
    "build_category_count_chart",
    "build_activity_chart",
]

_SERIES_NAMES = {
    "items_added": "Items Added",
    "requests": "Requests Created",
    "activity": "Total Activity",
}

PLACEHOLDER_NOTE = "Sample data: no records in this period yet."


def _empty_plotly_figure(message: str, tokens: ThemeTokens) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        annotations=[
            dict(
                text=message,
                x=0.5,
                y=0.5,
                xref="paper",
                yref="paper",
                showarrow=False,
                font=dict(color=tokens.placeholder_note_color, size=14, family=tokens.label_font),
            )
        ],
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        margin=dict(l=0, r=0, t=20, b=0),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def _apply_layout(fig: go.Figure, tokens: ThemeTokens, *, placeholder: bool) -> go.Figure:
    fig.update_layout(
        title="",
        margin=dict(l=0, r=0, t=30 if placeholder else 20, b=0),
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1.0),
        font=dict(color=tokens.text_color, family=tokens.label_font, size=tokens.label_size),
        xaxis=dict(showgrid=False, linecolor=tokens.axis_color),
        yaxis=dict(showgrid=True, gridcolor=tokens.grid_color, zeroline=False, rangemode="tozero"),
        hoverlabel=dict(
            bgcolor=tokens.tooltip_background,
            bordercolor=tokens.tooltip_border,
            font=dict(color=tokens.tooltip_text),
        ),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    if placeholder:
        fig.add_annotation(
            text=PLACEHOLDER_NOTE,
            x=0,
            y=1.12,
            xref="paper",
            yref="paper",
            xanchor="left",
            showarrow=False,
            font=dict(color=tokens.placeholder_note_color, size=11, family=tokens.label_font),
        )
    return fig


def build_trend_chart(trend: TrendResult, theme: Theme | str = Theme.LIGHT) -> go.Figure:
    """Render items added and requests created as overlaid area series."""

    tokens = theme_tokens(theme)
    df = trend.to_frame()
    if df.empty:
        return _empty_plotly_figure("No activity for this period.", tokens)

    styles = {
        "items_added": (tokens.items_added_color, tokens.items_added_fill),
        "requests": (tokens.requests_color, tokens.requests_fill),
    }

    fig = go.Figure()
    for series in trend.series:
        color, fill = styles.get(series, (tokens.activity_color, "rgba(49, 130, 206, 0.2)"))
        fig.add_trace(
            go.Scatter(
                x=df["label"],
                y=df[series],
                mode="lines",
                name=_SERIES_NAMES.get(series, series.replace("_", " ").title()),
                line=dict(color=color, width=2, shape="spline", smoothing=0.4),
                fill="tozeroy",
                fillcolor=fill,
                hovertemplate="%{x}<br>%{y:,}<extra></extra>",
            )
        )

    return _apply_layout(fig, tokens, placeholder=trend.is_placeholder)


def build_activity_chart(activity: TrendResult, theme: Theme | str = Theme.LIGHT) -> go.Figure:
    """Render requests against total activity (requests plus issue reports)."""

    tokens = theme_tokens(theme)
    df = activity.to_frame()
    if df.empty or not df[list(activity.series)].to_numpy().any():
        return _empty_plotly_figure("No requests or reports for this period.", tokens)

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=df["label"],
            y=df["activity"],
            mode="lines+markers",
            name=_SERIES_NAMES["activity"],
            line=dict(color=tokens.activity_color, width=2),
            hovertemplate="%{x}<br>%{y:,}<extra></extra>",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=df["label"],
            y=df["requests"],
            mode="lines+markers",
            name=_SERIES_NAMES["requests"],
            line=dict(color=tokens.requests_color, width=2, dash="dash"),
            hovertemplate="%{x}<br>%{y:,}<extra></extra>",
        )
    )
    return _apply_layout(fig, tokens, placeholder=False)


def build_category_cost_chart(
    costs: CategoryResult,
    theme: Theme | str = Theme.LIGHT,
    currency_symbol: str = "₱",
) -> go.Figure:
    """Render total inventory cost per category as vertical bars."""

    tokens = theme_tokens(theme)
    df = costs.to_frame()
    if df.empty:
        return _empty_plotly_figure("No inventory costs recorded.", tokens)

    df["formatted_cost"] = df["cost"].map(lambda x: f"{currency_symbol}{x:,.0f}")
    fig = px.bar(
        df,
        x="name",
        y="cost",
        text="formatted_cost",
        color_discrete_sequence=[tokens.cost_bar_color],
    )
    fig.update_traces(
        name="Total Cost",
        hovertemplate="%{x}<br>Total Cost: %{text}<extra></extra>",
        textposition="outside",
        cliponaxis=False,
    )
    fig = _apply_layout(fig, tokens, placeholder=costs.is_placeholder)
    fig.update_layout(
        hovermode="closest",
        xaxis=dict(title=""),
        yaxis=dict(title=f"Cost ({currency_symbol})"),
        bargap=0.35,
    )
    return fig


def build_category_count_chart(counts: CategoryResult, theme: Theme | str = Theme.LIGHT) -> go.Figure:
    """Render request counts per category as horizontal bars."""

    tokens = theme_tokens(theme)
    df = counts.to_frame()
    if df.empty:
        return _empty_plotly_figure("No requests recorded.", tokens)

    df = df.iloc[::-1]
    fig = px.bar(
        df,
        x="value",
        y="label",
        orientation="h",
        text="value",
        color_discrete_sequence=[tokens.count_bar_color],
    )
    fig.update_traces(hovertemplate="%{y}<br>Requests: %{x:,}<extra></extra>", textposition="outside")
    fig = _apply_layout(fig, tokens, placeholder=counts.is_placeholder)
    fig.update_layout(
        hovermode="closest",
        xaxis=dict(title="", showgrid=True, gridcolor=tokens.grid_color),
        yaxis=dict(title="", automargin=True, showgrid=False),
    )
    return fig
