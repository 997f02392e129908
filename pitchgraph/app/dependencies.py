from __future__ import annotations

from dataclasses import dataclass

from ..adapters.storage_local import PreferencesLocal
from ..domain.ports import NetworkCallingPort, NetworkServicePort, PlayerStorePort
from ..viewmodels.settings_vm import SettingsVM


@dataclass
class AppDependencies:
    """Collaborators handed to every navigation flow.

    Built once by the composition root in ``pitchgraph.app.main``.
    """

    settings: SettingsVM
    network_caller: NetworkCallingPort
    network_service: NetworkServicePort
    preferences: PreferencesLocal
    player_store: PlayerStorePort
