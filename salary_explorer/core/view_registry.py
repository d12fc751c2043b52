from __future__ import annotations
from typing import Dict, List, Type

from .dataset import Dataset
from .base_view import BaseView


class ViewRegistry:
    """
    Ordered collection of the chart classes shown side by side.

    - Holds {@link BaseView} subclasses; instances are created per coordinator
      because views hold a reference to the Dataset they draw
    - Registration order is the render order and the card order on the page
    - Capability lookups (brushable / zoomable / hoverable) drive which Dash
      callbacks get wired for which graph
    """

    def __init__(self):
        self._classes: Dict[str, Type[BaseView]] = {}

    def register(self, view_cls: Type[BaseView]) -> None:
        """
        :param view_cls: a {@link BaseView} subclass with a unique, non-empty 'id'

        Raises:
            TypeError: if view_cls is not a BaseView subclass
            ValueError: if the id is missing or already taken
        """
        if not isinstance(view_cls, type) or not issubclass(view_cls, BaseView):
            raise TypeError(f"{view_cls!r} is not a BaseView subclass")
        if not view_cls.id:
            raise ValueError(f"{view_cls.__name__} has no 'id'")
        if view_cls.id in self._classes:
            raise ValueError(f"View '{view_cls.id}' already registered")

        self._classes[view_cls.id] = view_cls

    def create_all(self, dataset: Dataset) -> List[BaseView]:
        return [cls(dataset) for cls in self._classes.values()]

    def all_classes(self) -> List[Type[BaseView]]:
        return list(self._classes.values())

    def ids(self) -> List[str]:
        return list(self._classes)

    def brushable_ids(self) -> List[str]:
        return [view_id for view_id, cls in self._classes.items() if cls.brushable]

    def zoomable_ids(self) -> List[str]:
        return [view_id for view_id, cls in self._classes.items() if cls.zoomable]

    def hoverable_ids(self) -> List[str]:
        return [view_id for view_id, cls in self._classes.items() if cls.hoverable]
