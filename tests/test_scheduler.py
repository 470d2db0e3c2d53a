"""
Tests for the deferred AI task queue.
"""

from monodeal.scheduler import TaskQueue


def test_tasks_run_in_fifo_order():
    queue = TaskQueue()
    ran = []
    queue.schedule("a", lambda: ran.append("a"))
    queue.schedule("b", lambda: ran.append("b"))

    assert queue.run_pending() == 2
    assert ran == ["a", "b"]
    assert len(queue) == 0


def test_duplicate_key_is_refused_while_pending():
    queue = TaskQueue()
    assert queue.schedule("ai_turn", lambda: None, 500)
    assert not queue.schedule("ai_turn", lambda: None)
    assert queue.peek().delay_ms == 500

    queue.run_next()
    assert queue.schedule("ai_turn", lambda: None)


def test_tasks_scheduled_while_draining_also_run():
    queue = TaskQueue()
    ran = []

    def first():
        ran.append("first")
        queue.schedule("second", lambda: ran.append("second"))

    queue.schedule("first", first)
    assert queue.run_pending() == 2
    assert ran == ["first", "second"]


def test_nested_drain_does_nothing():
    queue = TaskQueue()
    nested = []

    def outer():
        queue.schedule("inner", lambda: None)
        nested.append(queue.run_pending())

    queue.schedule("outer", outer)
    assert queue.run_pending() == 2
    assert nested == [0]


def test_max_tasks_and_clear():
    queue = TaskQueue()
    for key in "abc":
        queue.schedule(key, lambda: None)

    assert queue.run_pending(max_tasks=1) == 1
    assert queue.is_pending("b")
    queue.clear()
    assert not queue.run_next()
