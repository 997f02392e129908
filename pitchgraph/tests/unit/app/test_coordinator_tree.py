from __future__ import annotations

import pytest

from pitchgraph.app.coordinator import (
    ChildCoordinator,
    CoordinatorState,
    CoordinatorStateError,
    CoordinatorTree,
    ParentCoordinator,
)
from pitchgraph.domain.navigation import NavigationStack, Screen


class RootFlow(ParentCoordinator):
    def show(self) -> None:
        pass


class LeafFlow(ChildCoordinator):
    def show(self) -> None:
        self.navigation.push(self._own(Screen(name="leaf")), animated=False)


def make_root() -> RootFlow:
    return RootFlow(NavigationStack.with_root(Screen(name="root")), CoordinatorTree())


def make_leaf(root: RootFlow) -> LeafFlow:
    leaf = LeafFlow(root.navigation, root.tree)
    leaf.parent = root
    return leaf


def test_add_child_then_finish_removes_it() -> None:
    root = make_root()
    leaf = make_leaf(root)

    root.add_child(leaf)
    assert root.child_coordinators == [leaf]
    assert leaf in root.tree

    root.child_did_finish(leaf)
    assert root.child_coordinators == []
    assert leaf not in root.tree


def test_add_none_is_a_no_op() -> None:
    root = make_root()

    root.add_child(None)

    assert root.child_coordinators == []
    assert len(root.tree) == 1


def test_finishing_an_unknown_child_is_a_no_op() -> None:
    root = make_root()
    registered, stranger = make_leaf(root), make_leaf(root)
    root.add_child(registered)

    root.child_did_finish(stranger)
    root.child_did_finish(None)

    assert root.child_coordinators == [registered]


def test_duplicate_registration_is_removed_one_at_a_time() -> None:
    root = make_root()
    leaf = make_leaf(root)
    root.add_child(leaf)
    root.add_child(leaf)

    root.child_did_finish(leaf)
    assert root.child_coordinators == [leaf]
    assert leaf in root.tree

    root.child_did_finish(leaf)
    assert root.child_coordinators == []
    assert leaf not in root.tree


def test_popping_the_screen_finishes_the_flow() -> None:
    root = make_root()
    leaf = make_leaf(root)
    root.add_child(leaf)
    leaf.start()

    assert leaf.state is CoordinatorState.STARTED
    assert root.navigation.top_screen is leaf.view_controller_ref

    popped = leaf.pop_view_controller()

    assert popped is leaf.view_controller_ref
    assert leaf.state is CoordinatorState.FINISHED
    assert root.child_coordinators == []


def test_finish_is_idempotent_and_restart_is_rejected() -> None:
    root = make_root()
    leaf = make_leaf(root)
    root.add_child(leaf)
    leaf.start()

    leaf.coordinator_did_finish()
    leaf.coordinator_did_finish()

    with pytest.raises(CoordinatorStateError):
        leaf.start()


def test_parent_lookup_goes_through_the_tree() -> None:
    root = make_root()
    leaf = LeafFlow(root.navigation, root.tree)
    assert leaf.parent is None

    leaf.parent = root
    assert leaf.parent is root

    root.tree.release(root.coordinator_id)
    assert leaf.parent is None
    # Finishing with a released parent does nothing beyond the state change.
    leaf.coordinator_did_finish()
    assert leaf.state is CoordinatorState.FINISHED


def test_present_and_dismiss_modal_use_top_screen() -> None:
    root = make_root()
    modal = Screen(name="modal")

    root.present_modal(modal, animated=True)
    assert root.navigation.presented_screen is modal

    root.dismiss_modal(animated=True)
    assert root.navigation.presented_screen is None
