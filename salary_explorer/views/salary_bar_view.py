from __future__ import annotations

from typing import List, Tuple

import pandas as pd
import plotly.graph_objects as go

from salary_explorer.core.aggregator import AggregateGroup, aggregate
from salary_explorer.core.base_view import BaseView, RenderContext
from salary_explorer.core.fields import JOB_TITLE, SALARY_IN_USD
from salary_explorer.core.projector import CategoricalProjector, LinearProjector, numeric_domain
from salary_explorer.views.formatting import salary_rounded, salary_tick

BAR_COLOR = "#4e79a7"
BAR_COLOR_MUTED = "#b8c7da"


class SalaryBarView(BaseView):
    """
    Overview: average salary of the best-paid job titles.

    - One bar per AggregateGroup (job title), placed by a band projector
    - Aggregation runs over the whole Dataset so the bars stay put while brushing
    - Brushing horizontally across whole bars filters every other view
    """

    id = "salary_bar"
    label = "Average Salary by Job Title"
    brushable = True

    def _layout(self, ctx: RenderContext) -> Tuple[List[AggregateGroup], CategoricalProjector, LinearProjector]:
        cfg = ctx.config
        groups = aggregate(
            ctx.dataset.frame,
            JOB_TITLE,
            SALARY_IN_USD,
            min_count=cfg.min_group_count,
            top_n=cfg.top_n,
        )
        band = CategoricalProjector.band(
            JOB_TITLE,
            [g.key for g in groups],
            (0, cfg.inner_width),
            padding=cfg.band_padding,
        )
        y = LinearProjector(
            field="mean_salary",
            domain=numeric_domain(
                [g.mean for g in groups],
                zero_based=True,
                headroom=cfg.headroom,
                nice=cfg.nice,
            ),
            range=(cfg.inner_height, 0),
        )
        return groups, band, y

    def brush_targets(self, ctx: RenderContext) -> Tuple[List[AggregateGroup], CategoricalProjector]:
        groups, band, _ = self._layout(ctx)
        return groups, band

    def compute_data(self, ctx: RenderContext) -> pd.DataFrame:
        groups, band, y = self._layout(ctx)

        if not groups:
            return pd.DataFrame(columns=["job_title", "mean", "count", "x", "center", "width", "y", "height"])

        allowed = ctx.predicate.allowed
        base = ctx.config.inner_height
        records = []
        for g in groups:
            left, right = band.extent(g.key)
            top = y.map(g.mean)
            records.append(
                {
                    "job_title": g.key,
                    "mean": g.mean,
                    "count": g.count,
                    "x": left,
                    "center": (left + right) / 2,
                    "width": right - left,
                    "y": top,
                    "height": base - top,
                    "label": salary_rounded(g.mean),
                    "selected": allowed is None or g.key in allowed,
                }
            )

        df = pd.DataFrame.from_records(records)
        df.attrs["y_ticks"] = [(y.map(t), salary_tick(t)) for t in y.ticks()]
        return df

    def render_figure(self, data: pd.DataFrame, ctx: RenderContext) -> go.Figure:
        cfg = ctx.config
        colors = [BAR_COLOR if sel else BAR_COLOR_MUTED for sel in data["selected"]]

        fig = go.Figure(
            go.Bar(
                x=data["center"],
                y=data["height"],
                base=data["y"],
                width=data["width"],
                marker=dict(color=colors),
                text=data["label"],
                textposition="outside",
                textfont=dict(size=9),
                customdata=data[["job_title", "mean", "count"]].to_numpy(),
                hovertemplate="<b>%{customdata[0]}</b><br>"
                              "Average: $%{customdata[1]:,.0f}<br>"
                              "Jobs: %{customdata[2]}<extra></extra>",
            )
        )

        y_ticks = data.attrs.get("y_ticks", [])
        fig.update_layout(
            title=dict(text="Drag to brush across bars to filter data", font=dict(size=12)),
            width=cfg.chart_width,
            height=cfg.chart_height,
            margin=dict(l=cfg.margin.left, r=cfg.margin.right, t=cfg.margin.top, b=cfg.margin.bottom),
            dragmode="select",
            selectdirection="h",
            showlegend=False,
            xaxis=dict(
                range=[0, cfg.inner_width],
                fixedrange=True,
                tickvals=list(data["center"]),
                ticktext=list(data["job_title"]),
                tickangle=-19,
                tickfont=dict(size=8),
                showgrid=False,
            ),
            yaxis=dict(
                range=[cfg.inner_height, 0],
                fixedrange=True,
                tickvals=[pos for pos, _ in y_ticks],
                ticktext=[text for _, text in y_ticks],
                title="Average Salary (USD)",
                gridcolor="rgba(0,0,0,0.1)",
            ),
        )
        return fig
