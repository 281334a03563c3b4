from reactivex import Subject

from pyreselect import create_selector, create_structured_selector, select


def test_select_emits_only_changed_results():
    selector = create_selector([lambda state: state["a"]], lambda a: [a])
    states = Subject()
    results = []
    states.pipe(select(selector)).subscribe(results.append)

    states.on_next({"a": 1})
    states.on_next({"a": 1})
    states.on_next({"a": 2})
    states.on_next({"a": 2})

    assert results == [[1], [2]]
    assert selector.recomputations() == 2


def test_select_forwards_extra_arguments():
    selector = create_selector(
        [lambda state, item_id: state["items"][item_id]],
        lambda item: item.upper(),
    )
    states = Subject()
    results = []
    states.pipe(select(selector, "b")).subscribe(results.append)

    states.on_next({"items": {"a": "apple", "b": "banana"}})

    assert results == ["BANANA"]


def test_select_from_state_pairs():
    selector = create_structured_selector({"count": lambda state: state["count"]})
    states = Subject()
    results = []
    states.pipe(select(selector, pairs=True)).subscribe(results.append)

    initial = {"count": 0}
    updated = {"count": 1}
    states.on_next(({}, initial))
    states.on_next((initial, {"count": 0}))
    states.on_next((initial, updated))

    assert results == [{"count": 0}, {"count": 1}]


def test_select_delivers_selector_errors():
    def explode(value):
        raise RuntimeError("test error")

    selector = create_selector([lambda state: state], explode)
    states = Subject()
    results = []
    errors = []
    states.pipe(select(selector)).subscribe(on_next=results.append, on_error=errors.append)

    states.on_next({})

    assert results == []
    assert len(errors) == 1
    assert str(errors[0]) == "test error"
