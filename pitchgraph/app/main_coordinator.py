"""Root coordinator: builds the tab bar and starts every child flow."""

from __future__ import annotations

from typing import List, Optional, Sequence, Type

from ..domain.navigation import NavigationStack
from ..domain.players import PlayerData
from .coordinator import CoordinatorTree, ParentCoordinator
from .dependencies import AppDependencies
from .flows import (
    AppFlow,
    CloudStatusCoordinator,
    ComparisonCoordinator,
    LastSearchedCoordinator,
    PlayerCoordinator,
    PlayerSearchCoordinator,
    SearchTwoCoordinator,
    SettingsCoordinator,
    StatsSettingsCoordinator,
    WhatsNewCoordinator,
)


class MainCoordinator(ParentCoordinator):
    """Owns the coordinator tree and acts as factory for all child flows."""

    def __init__(
        self,
        navigation: NavigationStack,
        deps: AppDependencies,
        tree: Optional[CoordinatorTree] = None,
    ) -> None:
        super().__init__(navigation, tree if tree is not None else CoordinatorTree())
        self.deps = deps
        self.tabs: List[NavigationStack] = []

    def show(self) -> None:
        self.tabs = [NavigationStack(), NavigationStack()]
        for flow_cls, stack in zip((PlayerSearchCoordinator, SearchTwoCoordinator), self.tabs):
            self._start_child(flow_cls(stack, self.tree, self.deps))
        self._log.info("Tab bar ready with %d tabs", len(self.tabs))

    def _start_child(self, child: AppFlow) -> AppFlow:
        child.parent = self
        self.add_child(child)
        child.start()
        return child

    def _flow(self, flow_cls: Type[AppFlow], navigation: NavigationStack) -> AppFlow:
        return self._start_child(flow_cls(navigation, self.tree, self.deps))

    # ---- screen helpers ----
    def settings_screen(self, navigation: NavigationStack) -> AppFlow:
        return self._flow(SettingsCoordinator, navigation)

    def stats_screen(self, navigation: NavigationStack) -> AppFlow:
        return self._flow(StatsSettingsCoordinator, navigation)

    def icloud_screen(self, navigation: NavigationStack) -> AppFlow:
        return self._flow(CloudStatusCoordinator, navigation)

    def whats_new_screen(self, navigation: NavigationStack) -> AppFlow:
        return self._flow(WhatsNewCoordinator, navigation)

    def last_searched_screen(self, navigation: NavigationStack) -> AppFlow:
        return self._flow(LastSearchedCoordinator, navigation)

    def player_screen(
        self, navigation: NavigationStack, player_data: Optional[PlayerData] = None
    ) -> AppFlow:
        return self._start_child(PlayerCoordinator(navigation, self.tree, self.deps, player_data))

    def comparison_screen(
        self, navigation: NavigationStack, players: Optional[Sequence[PlayerData]] = None
    ) -> AppFlow:
        return self._start_child(ComparisonCoordinator(navigation, self.tree, self.deps, players))
