import asyncio

import pytest

from src.ui.toasts import DEFAULT_DURATION_MS, ToastQueue, ToastType


async def test_show_toast_then_auto_expire():
    queue = ToastQueue()
    toast_id = queue.show_toast("success", "Saved", duration=20)

    assert len(queue) == 1
    assert queue.toasts[0].id == toast_id
    assert queue.toasts[0].type is ToastType.SUCCESS

    await asyncio.sleep(0.1)
    assert len(queue) == 0
    assert queue.pending_timers() == 0


async def test_default_duration_schedules_five_seconds():
    loop = asyncio.get_running_loop()
    queue = ToastQueue()
    before = loop.time()
    toast_id = queue.show_toast("info", "Hello")

    assert queue.toasts[0].duration == DEFAULT_DURATION_MS
    when = queue._timers[toast_id].when()
    assert 4.9 <= when - before <= 5.1


async def test_remove_middle_keeps_order():
    queue = ToastQueue()
    first = queue.show_toast("info", "one")
    middle = queue.show_toast("error", "two")
    last = queue.show_toast("success", "three")

    queue.remove_toast(middle)

    assert [t.id for t in queue.toasts] == [first, last]
    assert [t.message for t in queue.toasts] == ["one", "three"]


async def test_remove_after_expiry_is_noop():
    queue = ToastQueue()
    changes = []
    queue.subscribe(changes.append)
    toast_id = queue.show_toast("info", "brief", duration=10)
    await asyncio.sleep(0.05)
    assert len(queue) == 0
    seen = len(changes)

    queue.remove_toast(toast_id)

    assert len(queue) == 0
    assert len(changes) == seen


async def test_manual_dismiss_then_timer_fires_safely():
    queue = ToastQueue()
    toast_id = queue.show_toast("info", "dismiss me", duration=20)
    other = queue.show_toast("info", "stay", duration=1000)

    queue.remove_toast(toast_id)
    assert queue.pending_timers() == 2

    await asyncio.sleep(0.06)
    assert [t.id for t in queue.toasts] == [other]
    assert queue.pending_timers() == 1


async def test_each_toast_expires_on_its_own_timer():
    queue = ToastQueue()
    queue.show_toast("info", "long", duration=150)
    queue.show_toast("info", "short", duration=10)

    await asyncio.sleep(0.06)
    assert [t.message for t in queue.toasts] == ["long"]


async def test_listeners_receive_snapshots_and_can_unsubscribe():
    queue = ToastQueue()
    seen = []
    unsubscribe = queue.subscribe(lambda toasts: seen.append([t.message for t in toasts]))

    a = queue.show_toast("info", "a")
    queue.show_toast("info", "b")
    queue.remove_toast(a)
    unsubscribe()
    queue.show_toast("info", "c")

    assert seen == [["a"], ["a", "b"], ["b"]]


async def test_failing_listener_does_not_break_queue():
    queue = ToastQueue()

    def broken(_):
        raise RuntimeError("listener failure")

    queue.subscribe(broken)
    queue.show_toast("error", "still shown")
    assert len(queue) == 1


async def test_unknown_type_is_rejected():
    queue = ToastQueue()
    with pytest.raises(ValueError):
        queue.show_toast("warning", "nope")
    assert len(queue) == 0


async def test_ids_are_unique():
    queue = ToastQueue()
    ids = {queue.show_toast("info", str(i)) for i in range(200)}
    assert len(ids) == 200


async def test_render_stacks_and_escapes():
    queue = ToastQueue()
    queue.show_toast("error", "<b>bad</b>")
    queue.show_toast("success", "ok")

    html = queue.render()
    assert "&lt;b&gt;bad&lt;/b&gt;" in html
    assert html.index("toast-error") < html.index("toast-success")
    assert "border-red-400" in html
