from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dq_dashboard.config.model import GlobalConfig
from dq_dashboard.core.view_registry import ViewRegistry
from dq_dashboard.services.dataset_store import DatasetStore


@dataclass
class AppConfig:
    """
    Shared state for the Dash app: config, the dataset store and the view
    registry. Passed into layout + callback registration functions instead
    of using module-level globals.
    """
    config_root: Path
    global_config: GlobalConfig
    store: DatasetStore
    registry: Optional[ViewRegistry] = None

    @property
    def data_root(self) -> Path:
        return self.global_config.data_root or self.config_root

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.registry is None:
            raise RuntimeError("AppConfig.registry must be initialized.")
