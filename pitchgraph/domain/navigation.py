"""In-memory navigation context shared by coordinators.

A ``NavigationStack`` is the headless counterpart of a platform navigation
controller: an ordered stack of pushed screens where the top screen may hold a
modally presented screen. Screens carry an optional ``on_disappear`` hook that
fires when they are popped or dismissed, which is how coordinators learn that
their flow has ended.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TabItem:
    """Tab bar entry attached to a tab's root screen."""

    title: str
    image: str
    tag: int


@dataclass(eq=False)
class Screen:
    """One presented unit (view controller equivalent)."""

    name: str
    view_model: Any = None
    tab_item: Optional[TabItem] = None
    embedded: Optional["NavigationStack"] = None
    """Navigation stack wrapping this screen when it is presented modally."""
    presented: Optional["Screen"] = None
    on_disappear: Optional[Callable[[], None]] = None

    def present(self, screen: "Screen", animated: bool) -> None:
        if self.presented is not None:
            _log.debug("Screen %s already presents %s; ignoring %s", self.name, self.presented.name, screen.name)
            return
        self.presented = screen

    def dismiss(self, animated: bool) -> Optional["Screen"]:
        screen = self.presented
        if screen is None:
            return None
        self.presented = None
        screen.disappear()
        return screen

    def disappear(self) -> None:
        if self.presented is not None:
            self.dismiss(animated=False)
        if self.embedded is not None:
            for child in reversed(self.embedded.screens):
                if child is not self:
                    child.disappear()
        hook = self.on_disappear
        self.on_disappear = None
        if hook is not None:
            hook()


@dataclass(eq=False)
class NavigationStack:
    """Ordered stack of pushed screens."""

    screens: List[Screen] = field(default_factory=list)

    @classmethod
    def with_root(cls, screen: Screen) -> "NavigationStack":
        stack = cls([screen])
        screen.embedded = stack
        return stack

    @property
    def top_screen(self) -> Optional[Screen]:
        return self.screens[-1] if self.screens else None

    @property
    def root_screen(self) -> Optional[Screen]:
        return self.screens[0] if self.screens else None

    def push(self, screen: Screen, animated: bool) -> None:
        _log.debug("push %s (animated=%s)", screen.name, animated)
        self.screens.append(screen)

    def pop(self, animated: bool) -> Optional[Screen]:
        # The root screen stays, matching platform navigation controllers.
        if len(self.screens) <= 1:
            return None
        screen = self.screens.pop()
        _log.debug("pop %s (animated=%s)", screen.name, animated)
        screen.disappear()
        return screen

    def present(self, screen: Screen, animated: bool) -> bool:
        top = self.top_screen
        if top is None:
            return False
        _log.debug("present %s over %s (animated=%s)", screen.name, top.name, animated)
        top.present(screen, animated)
        return top.presented is screen

    def dismiss(self, animated: bool) -> Optional[Screen]:
        top = self.top_screen
        if top is None:
            return None
        return top.dismiss(animated)

    @property
    def presented_screen(self) -> Optional[Screen]:
        top = self.top_screen
        return top.presented if top is not None else None


__all__ = ["NavigationStack", "Screen", "TabItem"]
