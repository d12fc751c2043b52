from __future__ import annotations

import dataclasses
import logging

import pandas as pd
import plotly.graph_objects as go

from salary_explorer.core.base_view import BaseView, RenderContext
from salary_explorer.core.exceptions import OutOfDomainError
from salary_explorer.core.fields import (
    EXPERIENCE_RANK_FIELD,
    REMOTE_RATIO,
    SALARY_FIELD,
)
from salary_explorer.core.projector import ColorProjector, project, ticks
from salary_explorer.core.transform import rescale
from salary_explorer.views.formatting import salary_tick

logger = logging.getLogger(__name__)

COLUMNS = ["x", "y", "color", "job_title", "experience_level", "salary_in_usd", "remote_ratio"]


class ScatterView(BaseView):
    """
    Experience level vs salary, colored by remote ratio.

    - X: experience as an ordinal (Entry..Executive)
    - Y: salary, domain taken from the working set
    - Zoom/pan: the view's ViewTransform is composed onto both base projectors;
      gridlines are hidden while a gesture is in flight
    """

    id = "scatter"
    label = "Salary by Experience Level"
    zoomable = True

    def compute_data(self, ctx: RenderContext) -> pd.DataFrame:
        ws = ctx.working_set
        if ws.empty:
            return pd.DataFrame(columns=COLUMNS)

        cfg = ctx.config
        width, height = cfg.inner_width, cfg.inner_height

        x_base = project(EXPERIENCE_RANK_FIELD, ws, (0, width))
        y_base = project(
            SALARY_FIELD,
            ws,
            (height, 0),
            zero_based=True,
            headroom=cfg.headroom,
            nice=cfg.nice,
        )
        color = ColorProjector(field=REMOTE_RATIO, anchors=tuple(cfg.color_anchors))

        x = rescale(x_base, ctx.transform, "x")
        y = rescale(y_base, ctx.transform, "y")

        records = []
        index = []
        for row_index, rec in zip(ws.index, ws.to_dict(orient="records")):
            try:
                px = x.map(rec["experience_level"])
            except OutOfDomainError as e:
                logger.warning(
                    "Skipping row outside projector domain",
                    extra={"view_id": self.id, "row_index": int(row_index), "field": e.field, "value": str(e.value)},
                )
                continue
            records.append(
                {
                    "x": px,
                    "y": y.map(rec["salary_in_usd"]),
                    "color": color.map(rec["remote_ratio"]),
                    "job_title": rec["job_title"],
                    "experience_level": rec["experience_level"],
                    "salary_in_usd": rec["salary_in_usd"],
                    "remote_ratio": rec["remote_ratio"],
                }
            )
            index.append(row_index)

        df = pd.DataFrame.from_records(records, index=pd.Index(index, name="row"), columns=COLUMNS)

        # Axis ticks follow the rescaled projectors; keep only those on screen
        df.attrs["x_ticks"] = [
            (x.map(v), EXPERIENCE_RANK_FIELD.display(v))
            for v in EXPERIENCE_RANK_FIELD.values
            if 0 <= x.map(v) <= width
        ]
        y_free = dataclasses.replace(y_base, clamp=False)
        lo, hi = sorted(y.visible_domain())
        df.attrs["y_ticks"] = [
            (y.k * y_free.map(t) + y.offset, salary_tick(t))
            for t in ticks(lo, hi, 10)
        ]
        df.attrs["y_domain"] = y_base.domain
        return df

    def render_figure(self, data: pd.DataFrame, ctx: RenderContext) -> go.Figure:
        cfg = ctx.config
        anchors = list(cfg.color_anchors)
        show_grid = not ctx.interacting

        fig = go.Figure()
        fig.add_trace(
            go.Scatter(
                x=data["x"],
                y=data["y"],
                mode="markers",
                marker=dict(
                    size=8,
                    color=data["color"],
                    opacity=0.7,
                    line=dict(color="#333", width=0.5),
                ),
                customdata=list(zip(data.index, data["job_title"], data["salary_in_usd"], data["remote_ratio"])),
                hovertemplate="<b>%{customdata[1]}</b><br>"
                              "Salary: $%{customdata[2]:,.0f}<br>"
                              "Remote: %{customdata[3]}%<extra></extra>",
                showlegend=False,
            )
        )

        # Legend for the remote ratio colors (0 / 50 / 100)
        fig.add_trace(
            go.Scatter(
                x=[None],
                y=[None],
                mode="markers",
                marker=dict(
                    colorscale=[[0.0, anchors[0]], [0.5, anchors[1]], [1.0, anchors[2]]],
                    cmin=0,
                    cmax=100,
                    color=[0],
                    showscale=True,
                    colorbar=dict(
                        title=dict(text="Remote Work Ratio", font=dict(size=9)),
                        tickvals=[0, 50, 100],
                        ticktext=["0%", "50%", "100%"],
                        orientation="h",
                        x=1.0,
                        xanchor="right",
                        y=1.02,
                        yanchor="bottom",
                        len=0.3,
                        thickness=12,
                    ),
                ),
                hoverinfo="skip",
                showlegend=False,
            )
        )

        x_ticks = data.attrs.get("x_ticks", [])
        y_ticks = data.attrs.get("y_ticks", [])
        fig.update_layout(
            title=dict(text="Use mouse wheel to zoom, drag to pan", font=dict(size=11)),
            width=cfg.chart_width,
            height=cfg.chart_height,
            margin=dict(l=cfg.margin.left, r=cfg.margin.right, t=cfg.margin.top, b=cfg.margin.bottom),
            dragmode="pan",
            xaxis=dict(
                range=[0, cfg.inner_width],
                tickvals=[pos for pos, _ in x_ticks],
                ticktext=[text for _, text in x_ticks],
                title="Experience Level",
                showgrid=show_grid,
                gridcolor="rgba(0,0,0,0.1)",
                zeroline=False,
            ),
            yaxis=dict(
                range=[cfg.inner_height, 0],
                tickvals=[pos for pos, _ in y_ticks],
                ticktext=[text for _, text in y_ticks],
                title="Salary (USD)",
                showgrid=show_grid,
                gridcolor="rgba(0,0,0,0.1)",
                zeroline=False,
            ),
        )
        return fig
