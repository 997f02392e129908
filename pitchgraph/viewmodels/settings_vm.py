from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Callable, Dict, Mapping, Optional

from ..adapters.http_client import API_HOST, BASE_URL_PLAYER_SEARCH
from ..utils.logging import env_debug_requested

API_KEY_ENV_VAR = "PITCHGRAPH_RAPIDAPI_KEY"


@dataclass
class SettingsConfig:
    """Typed runtime settings that persist via PreferencesLocal."""

    api_key: str = ""
    api_host: str = API_HOST
    player_search_url: str = BASE_URL_PLAYER_SEARCH
    request_timeout_s: float = 10.0
    storage_root: str = "."
    is_pro: bool = False
    debug_mode: bool = False
    """Serve bundled mock players instead of calling the API."""
    debug_logging: bool = False


def _default_api_key() -> str:
    return os.getenv(API_KEY_ENV_VAR, "").strip()


class SettingsVM:
    """Keeps app settings state and validation, no I/O here."""

    def __init__(
        self,
        *,
        config: Optional[SettingsConfig] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or SettingsConfig(
            api_key=_default_api_key(),
            debug_logging=env_debug_requested(),
        )
        self.on_save = on_save

    # ------------------------------------------------------------------
    # Properties bridging to the typed config
    # ------------------------------------------------------------------
    @property
    def api_key(self) -> str:
        return self.config.api_key

    @api_key.setter
    def api_key(self, value: str) -> None:
        self.config = replace(self.config, api_key=str(value or "").strip())

    @property
    def request_timeout_s(self) -> float:
        return self.config.request_timeout_s

    @request_timeout_s.setter
    def request_timeout_s(self, value: Any) -> None:
        self.config = replace(self.config, request_timeout_s=self._coerce_timeout(value))

    @property
    def storage_root(self) -> str:
        return self.config.storage_root

    @storage_root.setter
    def storage_root(self, value: Optional[str]) -> None:
        self.config = replace(self.config, storage_root=self._coerce_dir(value))

    @property
    def is_pro(self) -> bool:
        return self.config.is_pro

    @is_pro.setter
    def is_pro(self, value: Any) -> None:
        self.config = replace(self.config, is_pro=self._coerce_bool(value))

    @property
    def debug_mode(self) -> bool:
        return self.config.debug_mode

    @debug_mode.setter
    def debug_mode(self, value: Any) -> None:
        self.config = replace(self.config, debug_mode=self._coerce_bool(value))

    @property
    def debug_logging(self) -> bool:
        return self.config.debug_logging

    @debug_logging.setter
    def debug_logging(self, value: Any) -> None:
        self.config = replace(self.config, debug_logging=self._coerce_bool(value))

    # ------------------------------------------------------------------
    def is_valid(self) -> bool:
        if not self.config.api_host.strip():
            return False
        if not self.config.player_search_url.lower().startswith(("http://", "https://")):
            return False
        return self.config.request_timeout_s > 0

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply persisted settings to the view-model.

        Unknown keys are rejected so stale settings files surface early.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        allowed = {f.name for f in fields(SettingsConfig)}
        unknown = sorted(set(payload) - allowed)
        if unknown:
            raise ValueError(f"Unknown settings keys: {', '.join(unknown)}")

        updates: Dict[str, Any] = {}
        if "api_key" in payload:
            updates["api_key"] = str(payload["api_key"] or "").strip()
        if "api_host" in payload:
            updates["api_host"] = str(payload["api_host"] or API_HOST).strip()
        if "player_search_url" in payload:
            updates["player_search_url"] = str(payload["player_search_url"] or BASE_URL_PLAYER_SEARCH).strip()
        if "request_timeout_s" in payload:
            updates["request_timeout_s"] = self._coerce_timeout(payload["request_timeout_s"])
        if "storage_root" in payload:
            updates["storage_root"] = self._coerce_dir(payload["storage_root"])
        for key in ("is_pro", "debug_mode", "debug_logging"):
            if key in payload:
                updates[key] = self._coerce_bool(payload[key])
        self.config = replace(self.config, **updates)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self.config)

    def save(self) -> None:
        if self.on_save:
            self.on_save(self.to_dict())

    # ------------------------------------------------------------------
    @staticmethod
    def _coerce_timeout(value: Any) -> float:
        try:
            timeout = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"request_timeout_s must be a number, got {value!r}") from exc
        if timeout <= 0:
            raise ValueError("request_timeout_s must be positive")
        return timeout

    @staticmethod
    def _coerce_dir(value: Optional[str]) -> str:
        text = (value or "").strip() if isinstance(value, str) else ""
        return text or "."

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)
