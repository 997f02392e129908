from pitchgraph.domain.navigation import NavigationStack, Screen


def test_pop_keeps_root_and_fires_disappear_once() -> None:
    events = []
    stack = NavigationStack.with_root(Screen(name="root"))
    detail = Screen(name="detail", on_disappear=lambda: events.append("detail"))
    stack.push(detail, animated=False)

    assert stack.pop(animated=False) is detail
    assert stack.pop(animated=False) is None
    assert [s.name for s in stack.screens] == ["root"]
    detail.disappear()
    assert events == ["detail"]


def test_present_is_ignored_while_another_screen_is_presented() -> None:
    stack = NavigationStack.with_root(Screen(name="root"))
    first, second = Screen(name="first"), Screen(name="second")

    assert stack.present(first, animated=True) is True
    assert stack.present(second, animated=True) is False
    assert stack.presented_screen is first


def test_present_on_empty_stack_fails() -> None:
    assert NavigationStack().present(Screen(name="modal"), animated=True) is False


def test_dismiss_cascades_to_modal_stack() -> None:
    events = []
    stack = NavigationStack.with_root(Screen(name="root"))
    modal = Screen(name="modal", on_disappear=lambda: events.append("modal"))
    modal_stack = NavigationStack.with_root(modal)
    stack.present(modal, animated=True)
    pushed = Screen(name="pushed", on_disappear=lambda: events.append("pushed"))
    modal_stack.push(pushed, animated=True)
    nested = Screen(name="nested", on_disappear=lambda: events.append("nested"))
    modal_stack.present(nested, animated=True)

    assert stack.dismiss(animated=True) is modal

    assert stack.presented_screen is None
    assert events == ["nested", "pushed", "modal"]
