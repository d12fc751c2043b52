"""
Core domain layer: dataset, aggregation, projection, selection, transforms,
the view base class, the view registry and the coordinator that ties them together
"""

from .dataset import Dataset, Row
from .aggregator import AggregateGroup, aggregate
from .selection import SelectionFilter, SelectionPredicate
from .transform import TransformState, ViewTransform
from .base_view import BaseView, RenderContext
from .view_registry import ViewRegistry
from .coordinator import ViewCoordinator

__all__ = [
    "Dataset",
    "Row",
    "AggregateGroup",
    "aggregate",
    "SelectionFilter",
    "SelectionPredicate",
    "TransformState",
    "ViewTransform",
    "BaseView",
    "RenderContext",
    "ViewRegistry",
    "ViewCoordinator",
]
