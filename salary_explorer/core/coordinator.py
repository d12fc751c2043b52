from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

import pandas as pd

from salary_explorer.core.base_view import BaseView, RenderContext
from salary_explorer.core.dataset import Dataset
from salary_explorer.core.events import BrushEvent, HoverEvent, ZoomEvent
from salary_explorer.core.explorer_state import ExplorerState
from salary_explorer.core.selection import SelectionFilter, SelectionPredicate
from salary_explorer.core.transform import TransformState

if TYPE_CHECKING:
    from salary_explorer.config.model import ExplorerConfig

logger = logging.getLogger(__name__)

Renderer = Callable[[BaseView, RenderContext], Any]


def _default_renderer(view: BaseView, ctx: RenderContext) -> Any:
    return view.render(ctx)


class ViewCoordinator:
    """
    Keeps every registered view consistent with one predicate and one working set.

    Owns:
    - the active SelectionPredicate and the WorkingSet derived from it
    - the registered views (in render order)
    - per-view zoom/pan transforms

    Render protocol:
    - on_filter_change re-renders every view except the one that produced the filter
    - on_zoom re-renders only the zoomed view
    - on_resize re-renders everything, keeping the predicate

    Reentrancy: a filter change that arrives while a render pass is running is
    queued rather than run nested. When the pass finishes the coordinator runs
    again with the newest queued predicate, so passes never overlap and the last
    predicate received is the one reflected in the final output.
    """

    def __init__(
        self,
        dataset: Dataset,
        config: "ExplorerConfig",
        selection_filter: Optional[SelectionFilter] = None,
        state: Optional[ExplorerState] = None,
        renderer: Renderer = _default_renderer,
    ) -> None:
        state = state or ExplorerState()

        self.dataset = dataset
        self.config = config
        self.selection_filter = selection_filter or SelectionFilter(employment_type=config.employment_type)
        self.transforms = TransformState(config.scale_extent, state.transforms)
        self._renderer = renderer

        self._views: Dict[str, BaseView] = {}
        self._predicate: SelectionPredicate = state.predicate
        self._working_set: pd.DataFrame = self.selection_filter.working_set(dataset, self._predicate)

        self._rendering = False
        self._pending: Optional[Tuple[SelectionPredicate, Optional[str]]] = None

    # ------------------------------------------------------------------
    # Registration & state
    # ------------------------------------------------------------------
    def register(self, view: BaseView) -> None:
        if view.id in self._views:
            raise ValueError(f"View '{view.id}' already registered with coordinator")
        self._views[view.id] = view

    @property
    def view_ids(self) -> List[str]:
        return list(self._views)

    def view(self, view_id: str) -> BaseView:
        try:
            return self._views[view_id]
        except KeyError:
            raise KeyError(f"View '{view_id}' is not registered") from None

    @property
    def predicate(self) -> SelectionPredicate:
        return self._predicate

    @property
    def working_set(self) -> pd.DataFrame:
        return self._working_set

    def snapshot(self) -> ExplorerState:
        return ExplorerState(
            predicate=self._predicate,
            transforms={
                view_id: self.transforms.get(view_id)
                for view_id in self.transforms.to_dict()
            },
        )

    def context_for(self, view_id: str) -> RenderContext:
        return RenderContext(
            dataset=self.dataset,
            working_set=self._working_set,
            predicate=self._predicate,
            config=self.config,
            transform=self.transforms.get(view_id),
            interacting=self.transforms.is_interacting(view_id),
        )

    def render_view(self, view_id: str) -> Any:
        return self._renderer(self.view(view_id), self.context_for(view_id))

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def on_filter_change(self, predicate: SelectionPredicate, origin: Optional[str] = None) -> Dict[str, Any]:
        """
        Replace the predicate, rebuild the working set from the Dataset and
        re-render the dependent views.

        :return: rendered output per view id (empty when the change was queued
                 behind a pass already in flight)
        """
        if self._rendering:
            logger.debug(
                "Filter change queued behind in-flight render",
                extra={"origin": origin},
            )
            self._pending = (predicate, origin)
            return {}

        outputs: Dict[str, Any] = {}
        self._rendering = True
        try:
            while True:
                self._predicate = predicate
                self._working_set = self.selection_filter.working_set(self.dataset, predicate)

                logger.info(
                    "filter_change",
                    extra={
                        "origin": origin,
                        "n_selected_keys": None if predicate.allowed is None else len(predicate.allowed),
                        "n_rows": len(self._working_set),
                    },
                )

                # The origin keeps showing its own state; drop anything an earlier pass rendered for it
                outputs.pop(origin, None)
                for view_id in self._views:
                    if view_id != origin:
                        outputs[view_id] = self.render_view(view_id)

                if self._pending is None:
                    break
                predicate, origin = self._pending
                self._pending = None
        finally:
            # Nothing stays queued once the pass is over, even when a render raised
            self._rendering = False
            self._pending = None

        return outputs

    def on_brush_end(self, event: BrushEvent) -> Dict[str, Any]:
        """
        Derive a predicate from a finished brush on `event.view_id` and
        propagate it to the other views.
        """
        origin = self.view(event.view_id)
        if event.is_clear:
            predicate = self.selection_filter.clear()
        else:
            groups, band = origin.brush_targets(self.context_for(origin.id))
            predicate = self.selection_filter.brush(event.extent, groups, band)
        return self.on_filter_change(predicate, origin=origin.id)

    def on_zoom(self, event: ZoomEvent) -> Dict[str, Any]:
        """
        Store the (clamped) transform for one view and re-render only that view.
        The working set and the base projectors are not touched.
        """
        self.view(event.view_id)
        if event.active:
            self.transforms.begin_gesture(event.view_id)
        else:
            self.transforms.end_gesture(event.view_id)
        requested = event.transform
        self.transforms.zoom(event.view_id, requested.k, requested.tx, requested.ty)
        return {event.view_id: self.render_view(event.view_id)}

    def on_zoom_reset(self, view_id: str) -> Dict[str, Any]:
        self.view(view_id)
        self.transforms.end_gesture(view_id)
        self.transforms.reset(view_id)
        return {view_id: self.render_view(view_id)}

    def on_hover(self, view_id: str, row_index: Optional[int]) -> Optional[HoverEvent]:
        """
        Resolve a hovered mark to its full Row. None means hover-exit, or a
        row that is no longer part of the working set.
        """
        self.view(view_id)
        if row_index is None:
            return None
        if row_index not in self._working_set.index:
            logger.warning(
                "Hovered row is not in the working set",
                extra={"view_id": view_id, "row_index": row_index},
            )
            return None
        return HoverEvent(view_id=view_id, row_index=int(row_index), row=self.dataset.row(row_index))

    def on_resize(self) -> Dict[str, Any]:
        """Re-render every view with the current predicate and transforms."""
        return {view_id: self.render_view(view_id) for view_id in self._views}
