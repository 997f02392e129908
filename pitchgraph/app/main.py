from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from ..adapters.http_client import ApiSession, HttpConfig
from ..adapters.network_caller import NetworkCaller
from ..adapters.network_service import NetworkService
from ..adapters.storage_local import PlayerStoreLocal, PreferenceError, PreferenceKey, PreferencesLocal
from ..domain.navigation import NavigationStack, Screen
from ..utils import logging as logging_utils
from ..viewmodels.settings_vm import SettingsVM
from .dependencies import AppDependencies
from .main_coordinator import MainCoordinator

STORAGE_ROOT_ENV_VAR = "PITCHGRAPH_STORAGE_ROOT"

logging_utils.configure_root()


class App:
    """Bootstrap: load settings, build adapters and view models, start the root flow."""

    def __init__(self, storage_root: Optional[str] = None) -> None:
        self._log = logging.getLogger(__name__)
        self._storage_root = storage_root or os.environ.get(STORAGE_ROOT_ENV_VAR) or "."

        # ---- Preferences & settings ----
        self.preferences = PreferencesLocal(root_dir=self._storage_root)
        self.preferences.register_default_search_parameters()
        self.settings_vm = SettingsVM(on_save=self._on_save_settings)
        self._load_user_settings()

        # ---- Adapters ----
        self.http = ApiSession(self._http_config())
        self.network_caller = NetworkCaller(self.http)
        self.network_service = NetworkService(self.http)
        self.player_store = PlayerStoreLocal(root_dir=self._storage_root)

        self.deps = AppDependencies(
            settings=self.settings_vm,
            network_caller=self.network_caller,
            network_service=self.network_service,
            preferences=self.preferences,
            player_store=self.player_store,
        )

        # ---- Root coordinator ----
        self.navigation = NavigationStack.with_root(Screen(name="BaseTabBar"))
        self.coordinator = MainCoordinator(self.navigation, self.deps)

    def _http_config(self) -> HttpConfig:
        cfg = self.settings_vm.config
        return HttpConfig(
            api_key=cfg.api_key,
            api_host=cfg.api_host,
            request_timeout_s=cfg.request_timeout_s,
        )

    def _load_user_settings(self) -> None:
        payload: Any = self.preferences.load_raw(PreferenceKey.SETTINGS)
        if payload is not None:
            try:
                self.settings_vm.apply_dict(payload)
            except ValueError as exc:
                self._log.warning("Ignoring stored settings: %s", exc)
        self._apply_logging_preferences()

    def _apply_logging_preferences(self) -> None:
        level = logging_utils.apply_debug_preference(self.settings_vm.debug_logging)
        self._log.debug("Effective log level: %s", logging.getLevelName(level))

    def _on_save_settings(self, payload: Dict[str, Any]) -> None:
        self.http.cfg = self._http_config()
        # An env-provided API key is never written to disk.
        stored = dict(payload)
        if os.environ.get("PITCHGRAPH_RAPIDAPI_KEY"):
            stored.pop("api_key", None)
        try:
            self.preferences.save(PreferenceKey.SETTINGS, stored)
        except PreferenceError as exc:
            self._log.error("Could not save settings: %s", exc)
            return
        self._apply_logging_preferences()

    def start(self) -> MainCoordinator:
        if not self.preferences.has_app_launched_before():
            self._log.info("First launch; storing default preferences under %s", self._storage_root)
            self.preferences.mark_app_as_launched()
        self.coordinator.start()
        return self.coordinator


def main() -> None:
    app = App()
    coordinator = app.start()
    app._log.info(
        "Started %s with %d active flows", type(coordinator).__name__, len(coordinator.child_coordinators)
    )


if __name__ == "__main__":
    main()
