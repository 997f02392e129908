"""Coordinator tree: ownership of navigation flows.

Coordinators are kept in a ``CoordinatorTree`` arena keyed by a stable id.
Parents hold the ids of their active children and children hold the id of
their parent, so there are no live back-references between coordinators.
The arena owns every registered coordinator; releasing an id drops the only
strong reference the app keeps.

Lifecycle per coordinator: ``CREATED -> STARTED -> FINISHED``. A finished
coordinator cannot be started again.
"""

from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Iterator, List, Optional

from pitchgraph.domain.navigation import NavigationStack, Screen

CoordinatorId = str


class CoordinatorState(str, Enum):
    CREATED = "created"
    STARTED = "started"
    FINISHED = "finished"


class CoordinatorStateError(RuntimeError):
    """Raised when a finished coordinator is asked to start again."""


class CoordinatorTree:
    """Arena owning every live coordinator by id."""

    def __init__(self) -> None:
        self._nodes: Dict[CoordinatorId, "Coordinator"] = {}
        self._log = logging.getLogger(__name__)

    def register(self, coordinator: "Coordinator") -> CoordinatorId:
        self._nodes[coordinator.coordinator_id] = coordinator
        return coordinator.coordinator_id

    def get(self, coordinator_id: Optional[CoordinatorId]) -> Optional["Coordinator"]:
        if coordinator_id is None:
            return None
        return self._nodes.get(coordinator_id)

    def release(self, coordinator_id: CoordinatorId) -> None:
        node = self._nodes.pop(coordinator_id, None)
        if node is not None:
            self._log.debug("released %s (%s)", type(node).__name__, coordinator_id)

    def __contains__(self, coordinator: object) -> bool:
        if not isinstance(coordinator, Coordinator):
            return False
        return self._nodes.get(coordinator.coordinator_id) is coordinator

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator["Coordinator"]:
        return iter(list(self._nodes.values()))


class Coordinator(ABC):
    """One navigation flow: builds its screen and drives its navigation stack."""

    def __init__(self, navigation: NavigationStack, tree: CoordinatorTree) -> None:
        self.navigation = navigation
        self.tree = tree
        self.coordinator_id: CoordinatorId = uuid.uuid4().hex
        self.state = CoordinatorState.CREATED
        self._log = logging.getLogger(f"{__name__}.{type(self).__name__}")

    def start(self) -> None:
        """Build and show the primary screen.

        Raises:
            CoordinatorStateError: The coordinator already finished.
        """
        if self.state is CoordinatorState.FINISHED:
            raise CoordinatorStateError(
                f"{type(self).__name__} {self.coordinator_id} finished; create a new flow instead."
            )
        self.state = CoordinatorState.STARTED
        self._log.debug("start %s", self.coordinator_id)
        self.show()

    @abstractmethod
    def show(self) -> None:
        """Construct the flow's screen and push or present it."""

    def pop_view_controller(self) -> Optional[Screen]:
        return self.navigation.pop(animated=False)

    def present_modal(self, screen: Screen, animated: bool) -> bool:
        return self.navigation.present(screen, animated)

    def dismiss_modal(self, animated: bool) -> None:
        self.navigation.dismiss(animated)


class ParentCoordinator(Coordinator):
    """Coordinator that owns child coordinators."""

    def __init__(self, navigation: NavigationStack, tree: CoordinatorTree) -> None:
        super().__init__(navigation, tree)
        self._child_ids: List[CoordinatorId] = []
        tree.register(self)

    @property
    def child_coordinators(self) -> List[Coordinator]:
        children = (self.tree.get(cid) for cid in self._child_ids)
        return [child for child in children if child is not None]

    def add_child(self, child: Optional[Coordinator]) -> None:
        """Register ``child``; ``None`` is ignored and duplicates are not checked."""
        if child is None:
            return
        self.tree.register(child)
        self._child_ids.append(child.coordinator_id)

    def child_did_finish(self, child: Optional[Coordinator]) -> None:
        """Drop the first registration of ``child``; unknown children are ignored."""
        if child is None:
            return
        for index, cid in enumerate(self._child_ids):
            if self.tree.get(cid) is child:
                del self._child_ids[index]
                break
        else:
            return
        if child.coordinator_id not in self._child_ids:
            self.tree.release(child.coordinator_id)


class ChildCoordinator(Coordinator):
    """Coordinator created by a parent; reports back when its flow ends."""

    def __init__(self, navigation: NavigationStack, tree: CoordinatorTree) -> None:
        super().__init__(navigation, tree)
        self.parent_id: Optional[CoordinatorId] = None
        self.view_controller_ref: Optional[Screen] = None

    @property
    def parent(self) -> Optional[ParentCoordinator]:
        node = self.tree.get(self.parent_id)
        return node if isinstance(node, ParentCoordinator) else None

    @parent.setter
    def parent(self, value: Optional[ParentCoordinator]) -> None:
        self.parent_id = value.coordinator_id if value is not None else None

    def coordinator_did_finish(self) -> None:
        if self.state is CoordinatorState.FINISHED:
            return
        self.state = CoordinatorState.FINISHED
        self._log.debug("finish %s", self.coordinator_id)
        parent = self.parent
        if parent is not None:
            parent.child_did_finish(self)

    def _own(self, screen: Screen) -> Screen:
        """Tie ``screen``'s disappearance to this flow's completion."""
        self.view_controller_ref = screen
        screen.on_disappear = self.coordinator_did_finish
        return screen


__all__ = [
    "ChildCoordinator",
    "Coordinator",
    "CoordinatorId",
    "CoordinatorState",
    "CoordinatorStateError",
    "CoordinatorTree",
    "ParentCoordinator",
]
