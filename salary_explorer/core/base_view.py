from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Tuple

import pandas as pd
import plotly.graph_objs as go

from salary_explorer.core.aggregator import AggregateGroup
from salary_explorer.core.dataset import Dataset
from salary_explorer.core.projector import CategoricalProjector
from salary_explorer.core.selection import SelectionPredicate
from salary_explorer.core.transform import ViewTransform

if TYPE_CHECKING:
    from salary_explorer.config.model import ExplorerConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderContext:
    """
    Everything a view needs for one render pass. Built by the coordinator and
    passed in explicitly; views never reach for shared state.
    """

    dataset: Dataset
    working_set: pd.DataFrame
    predicate: SelectionPredicate
    config: "ExplorerConfig"
    transform: ViewTransform = ViewTransform()
    interacting: bool = False


class BaseView(ABC):
    """
    Abstract base class for all plot views.

    Defines the contract that every view in the app must follow
    - expose an 'id' - used internally
    - expose a 'label' - used for UI/human-readable applications
    - implement 'compute_data' - projected marks for the current RenderContext
    - implement 'render_figure' - used to render the figure using Plotly
    """

    id: str = None
    label: str = None

    # Interaction capabilities, read by the UI layer when wiring callbacks
    brushable: bool = False
    zoomable: bool = False
    hoverable: bool = False

    def __init__(self, dataset: Dataset):
        self.dataset = dataset

    @abstractmethod
    def compute_data(self, ctx: RenderContext) -> Any:
        """
        Compute the projected data for this view
        :param ctx: the current {@link RenderContext}
        :return: data: a dataframe of marks in pixel coordinates (empty when nothing to show)
        """
        raise NotImplementedError()

    @abstractmethod
    def render_figure(self, data: Any, ctx: RenderContext) -> go.Figure:
        """
        Render the figure given the computed data
        :param data: the data provided by {@link compute_data()}
        :param ctx: the current {@link RenderContext}
        :return: the Plotly figure for these parameters
        """
        raise NotImplementedError()

    def brush_targets(self, ctx: RenderContext) -> Tuple[List[AggregateGroup], CategoricalProjector]:
        """
        Groups drawn by this view plus the band projector that placed them.
        Only brushable views implement this.
        """
        raise NotImplementedError(f"View '{self.id}' does not support brushing")

    # ------------------------------------------------------------------
    # Common helpers for all views
    # ------------------------------------------------------------------
    def timed_compute(self, ctx: RenderContext) -> Any:
        start = time.perf_counter()
        data = self.compute_data(ctx)
        logger.debug(
            "compute_data",
            extra={
                "view_id": self.id,
                "n_rows": len(ctx.working_set),
                "elapsed_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return data

    def render(self, ctx: RenderContext) -> go.Figure:
        """
        Full render pass. Pure with respect to ctx, so rendering twice with the
        same context gives the same figure.
        """
        data = self.timed_compute(ctx)
        if data is None or (isinstance(data, pd.DataFrame) and data.empty):
            return self.empty_figure(f"{self.label}: no jobs match the current selection")
        return self.render_figure(data, ctx)

    @staticmethod
    def empty_figure(message: str) -> go.Figure:
        """
        Standardised 'no data' figure used by all views.
        """
        fig = go.Figure()
        fig.update_layout(
            title=message,
            xaxis={"visible": False},
            yaxis={"visible": False},
        )
        return fig
