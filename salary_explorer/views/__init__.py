from .salary_bar_view import SalaryBarView
from .scatter_view import ScatterView
from .parallel_view import ParallelCoordinatesView

__all__ = ["SalaryBarView", "ScatterView", "ParallelCoordinatesView"]
