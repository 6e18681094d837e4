import asyncio
import logging

from fieldkit.dispatch import ChangeDispatcher, LogicalTimer


def _dispatcher(store, timer, **kw) -> ChangeDispatcher:
    return ChangeDispatcher(store, timer, debounce_seconds=kw.get("debounce", 0.5))


def test_rapid_edits_commit_latest_value_once(store, timer):
    d = _dispatcher(store, timer)
    d.track("title", "old")

    d.enqueue("title", "e1")
    timer.advance(0.2)
    d.enqueue("title", "e2")
    timer.advance(0.2)
    d.enqueue("title", "e3")
    timer.advance(0.49)
    assert store.history == []

    timer.advance(0.1)
    assert store.history == [("title", "e3")]
    assert d.pending() == []


def test_no_commit_when_window_ends_on_committed_value(store, timer, caplog):
    d = _dispatcher(store, timer)
    d.track("title", "same")

    d.enqueue("title", "e1")
    d.enqueue("title", "e2")
    d.enqueue("title", "same")
    with caplog.at_level(logging.DEBUG, logger="fieldkit.dispatch"):
        timer.advance(1.0)

    assert store.history == []
    assert "Skipping no-op commit for title" in caplog.text


def test_commits_follow_edit_order_per_field(store, timer):
    d = _dispatcher(store, timer)
    d.track("title", "")
    for value in ("a", "b", "c"):
        d.enqueue("title", value)
        timer.advance(0.5)

    assert [v for _, v in store.history] == ["a", "b", "c"]


def test_fields_have_independent_windows(store, timer):
    d = _dispatcher(store, timer)
    d.enqueue("title", "T")
    timer.advance(0.3)
    d.enqueue("body", "B")
    timer.advance(0.2)
    assert store.history == [("title", "T")]
    assert d.pending() == ["body"]
    timer.advance(0.5)
    assert store.history == [("title", "T"), ("body", "B")]


def test_cancel_drops_pending_window(store, timer):
    d = _dispatcher(store, timer)
    d.enqueue("title", "x")
    assert d.cancel("title") is True
    assert d.cancel("title") is False
    timer.advance(5)
    assert store.history == []


def test_flush_commits_immediately_without_double_delivery(store, timer):
    d = _dispatcher(store, timer)
    seen = []
    d.add_listener(lambda path, value: seen.append((path, value)))

    d.enqueue("title", "x")
    d.enqueue("body", "y")
    assert d.flush("title") == 1
    assert d.pending() == ["body"]
    assert d.flush() == 1
    timer.advance(5)

    assert store.history == [("title", "x"), ("body", "y")]
    assert seen == store.history
    assert d.last_committed("title") == "x"


def test_queued_value_is_a_snapshot(store, timer):
    d = _dispatcher(store, timer)
    value = ["a"]
    d.enqueue("tags", value)
    value.append("b")
    timer.advance(1)
    assert store.history == [("tags", ["a"])]


def test_logical_timer_fires_in_order_and_skips_cancelled():
    timer = LogicalTimer()
    fired = []
    timer.call_later(2, fired.append, "late")
    h = timer.call_later(1, fired.append, "cancelled")
    timer.call_later(1, fired.append, "early")
    h.cancel()

    assert timer.pending() == 2
    assert timer.advance(3) == 2
    assert fired == ["early", "late"]
    assert timer.now == 3


def test_asyncio_loop_drives_the_window(store):
    async def scenario():
        d = ChangeDispatcher(store, asyncio.get_running_loop(), debounce_seconds=0.01)
        d.track("title", "old")
        d.enqueue("title", "e1")
        d.enqueue("title", "e2")
        assert d.pending() == ["title"]
        await asyncio.sleep(0.05)
        return d.pending()

    assert asyncio.run(scenario()) == []
    assert store.history == [("title", "e2")]
