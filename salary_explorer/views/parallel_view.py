from __future__ import annotations

import logging
from typing import Dict, List, Tuple

import pandas as pd
import plotly.graph_objects as go

from salary_explorer.core.base_view import BaseView, RenderContext
from salary_explorer.core.exceptions import OutOfDomainError
from salary_explorer.core.fields import PARALLEL_DIMENSIONS, SALARY_IN_USD, FieldSpec
from salary_explorer.core.projector import CategoricalProjector, LinearProjector, Projector, project
from salary_explorer.views.formatting import salary_tick

logger = logging.getLogger(__name__)

LINE_COLOR = "#69b3a2"


def _axis_ticks(spec: FieldSpec, projector: Projector) -> List[Tuple[float, str]]:
    if isinstance(projector, LinearProjector):
        fmt = salary_tick if spec.name == SALARY_IN_USD else (lambda v: f"{v:g}")
        return [(projector.map(t), fmt(t)) for t in projector.ticks(5)]
    return [(projector.map(v), str(v)) for v in spec.values]


class ParallelCoordinatesView(BaseView):
    """
    One polyline per job across experience, remote ratio, company size and salary.

    Categorical axes use point projectors over their enumerated values; numeric
    axes span the [min, max] of the working set. Hovering a line reports the
    full row behind it.
    """

    id = "parallel"
    label = "Parallel Coordinates"
    hoverable = True

    def projectors(self, ctx: RenderContext) -> Tuple[CategoricalProjector, Dict[str, Projector]]:
        cfg = ctx.config
        width, height = cfg.inner_width, cfg.inner_height
        x = CategoricalProjector.point(
            "dimension",
            [d.name for d in PARALLEL_DIMENSIONS],
            (0, width),
            padding=cfg.point_padding,
        )
        y = {
            d.name: project(d, ctx.working_set, (height, 0), padding=cfg.point_padding)
            for d in PARALLEL_DIMENSIONS
        }
        return x, y

    def compute_data(self, ctx: RenderContext) -> pd.DataFrame:
        ws = ctx.working_set
        columns = [f"y_{d.name}" for d in PARALLEL_DIMENSIONS] + ["job_title"]
        if ws.empty:
            return pd.DataFrame(columns=columns)

        x, y = self.projectors(ctx)

        records = []
        index = []
        for row_index, rec in zip(ws.index, ws.to_dict(orient="records")):
            try:
                coords = {f"y_{d.name}": y[d.name].map(rec[d.name]) for d in PARALLEL_DIMENSIONS}
            except OutOfDomainError as e:
                logger.warning(
                    "Skipping row outside projector domain",
                    extra={"view_id": self.id, "row_index": int(row_index), "field": e.field, "value": str(e.value)},
                )
                continue
            coords["job_title"] = rec["job_title"]
            records.append(coords)
            index.append(row_index)

        df = pd.DataFrame.from_records(records, index=pd.Index(index, name="row"), columns=columns)
        df.attrs["axes"] = [
            {
                "name": d.name,
                "label": d.label,
                "x": x.map(d.name),
                "ticks": _axis_ticks(d, y[d.name]),
            }
            for d in PARALLEL_DIMENSIONS
        ]
        return df

    def render_figure(self, data: pd.DataFrame, ctx: RenderContext) -> go.Figure:
        cfg = ctx.config
        axes = data.attrs.get("axes", [])
        axis_x = [a["x"] for a in axes]

        # All polylines in one trace, separated by gaps
        xs: List = []
        ys: List = []
        custom: List = []
        for row_index, rec in data.iterrows():
            xs.extend(axis_x + [None])
            ys.extend([rec[f"y_{a['name']}"] for a in axes] + [None])
            custom.extend([int(row_index)] * len(axes) + [None])

        fig = go.Figure(
            go.Scatter(
                x=xs,
                y=ys,
                mode="lines+markers",
                line=dict(color=LINE_COLOR, width=1.5),
                marker=dict(size=3, color=LINE_COLOR),
                opacity=0.3,
                connectgaps=False,
                customdata=custom,
                hoverinfo="none",
                showlegend=False,
            )
        )

        for a in axes:
            fig.add_shape(
                type="line",
                x0=a["x"], x1=a["x"],
                y0=0, y1=cfg.inner_height,
                line=dict(color="#000", width=1),
            )
            fig.add_annotation(
                x=a["x"], y=-10,
                text=a["label"],
                showarrow=False,
                yanchor="bottom",
                font=dict(size=10, color="#333"),
            )
            for pos, text in a["ticks"]:
                fig.add_annotation(
                    x=a["x"], y=pos,
                    text=text,
                    showarrow=False,
                    xanchor="right",
                    xshift=-4,
                    font=dict(size=9),
                )

        fig.update_layout(
            title=dict(text=f"Showing {len(data)} jobs - Hover over a line to see details", font=dict(size=11)),
            width=cfg.chart_width,
            height=cfg.chart_height,
            margin=dict(l=cfg.margin.left, r=cfg.margin.right, t=cfg.margin.top, b=cfg.margin.bottom),
            hovermode="closest",
            xaxis=dict(range=[0, cfg.inner_width], visible=False, fixedrange=True),
            yaxis=dict(range=[cfg.inner_height + 10, -30], visible=False, fixedrange=True),
        )
        return fig
