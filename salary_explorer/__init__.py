"""
Top-level package for the salary explorer.

This package exposes the core architecture (domain, views, UI adapters).
Most code should import from submodules such as:
    salary_explorer.core
    salary_explorer.views
    salary_explorer.ui
"""

__all__: list[str] = []
