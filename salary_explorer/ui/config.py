from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from salary_explorer.config.model import GlobalConfig
from salary_explorer.core.coordinator import ViewCoordinator
from salary_explorer.core.dataset import Dataset
from salary_explorer.core.explorer_state import ExplorerState
from salary_explorer.core.view_registry import ViewRegistry


@dataclass
class AppConfig:
    """
    Holds shared, read-only state for the Dash app: config, the loaded dataset
    and the view registry. Passed into layout + callback registration functions
    instead of using module-level globals. Interactive state lives in the
    explorer-state store, never here.
    """

    config_root: Path
    global_config: GlobalConfig
    dataset: Optional[Dataset] = None
    registry: Optional[ViewRegistry] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.dataset is None:
            raise RuntimeError("AppConfig.dataset must be loaded.")
        if self.registry is None:
            raise RuntimeError("AppConfig.registry must be initialized.")

    def build_coordinator(self, state: Optional[ExplorerState] = None) -> ViewCoordinator:
        """
        Fresh coordinator for one callback, restored from the stored state and
        wired with one instance of every registered view.
        """
        self.validate()
        coordinator = ViewCoordinator(
            dataset=self.dataset,
            config=self.global_config.explorer,
            state=state,
        )
        for view in self.registry.create_all(self.dataset):
            coordinator.register(view)
        return coordinator
