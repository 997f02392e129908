"""Concrete child flows started by ``MainCoordinator``.

Tab flows push their root screen without animation onto their own tab stack.
Settings-style flows wrap their screen in a fresh ``NavigationStack`` and
present it modally over the caller's top screen. Every flow finishes when its
primary screen disappears.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence

from ..domain.navigation import NavigationStack, Screen, TabItem
from ..domain.players import PlayerData
from ..viewmodels.cloud_status_vm import CloudStatusVM
from ..viewmodels.comparison_vm import ComparisonVM
from ..viewmodels.player_search_vm import PlayerSearchVM
from ..viewmodels.player_vm import PlayerVM
from ..viewmodels.stats_settings_vm import StatsSettingsVM
from ..viewmodels.stored_players_vm import LastSearchedVM
from .coordinator import ChildCoordinator, CoordinatorTree
from .dependencies import AppDependencies

if TYPE_CHECKING:
    from .main_coordinator import MainCoordinator

PLAYER_TAB = TabItem(title="Player", image="person.fill", tag=0)
COMPARE_TAB = TabItem(title="Compare", image="person.fill", tag=1)
LAST_SEARCHED_TAB = TabItem(title="Last Searched", image="magnifyingglass", tag=2)


class AppFlow(ChildCoordinator):
    """Child coordinator with access to the shared app dependencies."""

    def __init__(self, navigation: NavigationStack, tree: CoordinatorTree, deps: AppDependencies) -> None:
        super().__init__(navigation, tree)
        self.deps = deps

    @property
    def main(self) -> Optional["MainCoordinator"]:
        return self.parent  # type: ignore[return-value]

    def _push(self, screen: Screen) -> Screen:
        self.navigation.push(self._own(screen), animated=False)
        return screen

    def _present_wrapped(self, screen: Screen) -> Screen:
        NavigationStack.with_root(self._own(screen))
        if not self.present_modal(screen, animated=True):
            self._log.warning("Nothing to present %s over; stack is empty or busy", screen.name)
            screen.on_disappear = None
            self.coordinator_did_finish()
        return screen


# ---- Tab flows ----
class PlayerSearchCoordinator(AppFlow):
    def show(self) -> None:
        vm = PlayerSearchVM(
            self.deps.network_caller,
            base_url=self.deps.settings.config.player_search_url,
        )
        self._push(Screen(name="PlayerSearch", view_model=vm, tab_item=PLAYER_TAB))

    def navigate_to_settings(self) -> None:
        if self.main is not None:
            self.main.settings_screen(self.navigation)

    def navigate_to_player(self, player_data: Optional[PlayerData] = None) -> None:
        if self.main is not None:
            self.main.player_screen(self.navigation, player_data)


class SearchTwoCoordinator(AppFlow):
    def show(self) -> None:
        vm = ComparisonVM(
            self.deps.network_caller,
            player_search_url=self.deps.settings.config.player_search_url,
        )
        self._push(Screen(name="SearchTwoPlayers", view_model=vm, tab_item=COMPARE_TAB))

    def navigate_to_comparison(self, first: PlayerData, second: PlayerData) -> None:
        if self.main is not None:
            self.main.comparison_screen(self.navigation, [first, second])


class LastSearchedCoordinator(AppFlow):
    def show(self) -> None:
        vm = LastSearchedVM(
            self.deps.player_store,
            self.deps.network_caller,
            player_search_url=self.deps.settings.config.player_search_url,
        )
        self._push(Screen(name="LastSearched", view_model=vm, tab_item=LAST_SEARCHED_TAB))

    def navigate_to_player(self, player_data: Optional[PlayerData] = None) -> None:
        if self.main is not None:
            self.main.player_screen(self.navigation, player_data)


# ---- Detail flows ----
class PlayerCoordinator(AppFlow):
    def __init__(
        self,
        navigation: NavigationStack,
        tree: CoordinatorTree,
        deps: AppDependencies,
        player_data: Optional[PlayerData] = None,
    ) -> None:
        super().__init__(navigation, tree, deps)
        self.player_data = player_data

    def show(self) -> None:
        vm = PlayerVM(self.deps.player_store)
        vm.give_player_data(self.player_data)
        self._push(Screen(name="Player", view_model=vm))
        if self.player_data is not None and self.player_data.player_id:
            vm.manage_last_searched_players_and_update(
                self.player_data, is_pro=self.deps.settings.is_pro
            )

    def navigate_to_player(self, player_data: Optional[PlayerData] = None) -> None:
        if self.main is not None:
            self.main.player_screen(self.navigation, player_data)


class ComparisonCoordinator(AppFlow):
    def __init__(
        self,
        navigation: NavigationStack,
        tree: CoordinatorTree,
        deps: AppDependencies,
        players: Optional[Sequence[PlayerData]] = None,
    ) -> None:
        super().__init__(navigation, tree, deps)
        self.players: List[PlayerData] = list(players) if players else []

    def show(self) -> None:
        vm = ComparisonVM(
            self.deps.network_caller,
            player_search_url=self.deps.settings.config.player_search_url,
            player_data=self.players,
        )
        self._push(Screen(name="Comparison", view_model=vm))


# ---- Modal flows ----
class SettingsCoordinator(AppFlow):
    def show(self) -> None:
        self._present_wrapped(Screen(name="Settings", view_model=self.deps.settings))

    def _modal_stack(self) -> NavigationStack:
        screen = self.view_controller_ref
        if screen is not None and screen.embedded is not None:
            return screen.embedded
        return self.navigation

    def settings_stats_screen(self, navigation: Optional[NavigationStack] = None) -> None:
        if self.main is not None:
            self.main.stats_screen(navigation or self._modal_stack())

    def cloud_screen(self, navigation: Optional[NavigationStack] = None) -> None:
        if self.main is not None:
            self.main.icloud_screen(navigation or self._modal_stack())

    def whats_new_screen(self, navigation: Optional[NavigationStack] = None) -> None:
        if self.main is not None:
            self.main.whats_new_screen(navigation or self._modal_stack())


class StatsSettingsCoordinator(AppFlow):
    def show(self) -> None:
        vm = StatsSettingsVM(self.deps.preferences)
        self._present_wrapped(Screen(name="StatsSettings", view_model=vm))

    def settings_stats_screen(self) -> None:
        if self.main is not None:
            self.main.stats_screen(self.navigation)

    def cloud_screen(self) -> None:
        if self.main is not None:
            self.main.icloud_screen(self.navigation)


class CloudStatusCoordinator(AppFlow):
    def show(self) -> None:
        vm = CloudStatusVM(self.deps.network_service)
        self._present_wrapped(Screen(name="CloudStatus", view_model=vm))


class WhatsNewCoordinator(AppFlow):
    def show(self) -> None:
        self._present_wrapped(Screen(name="WhatsNew"))


__all__ = [
    "AppFlow",
    "COMPARE_TAB",
    "CloudStatusCoordinator",
    "ComparisonCoordinator",
    "LAST_SEARCHED_TAB",
    "LastSearchedCoordinator",
    "PLAYER_TAB",
    "PlayerCoordinator",
    "PlayerSearchCoordinator",
    "SearchTwoCoordinator",
    "SettingsCoordinator",
    "StatsSettingsCoordinator",
    "WhatsNewCoordinator",
]
