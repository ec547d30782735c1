import pytest

from webdemos.broadcast import CLOSED, Broadcaster, RoomRegistry
import queue


def test_submit_reaches_every_listener_in_order():
    broadcaster = Broadcaster()
    first, second = queue.Queue(), queue.Queue()
    broadcaster.register(first)
    broadcaster.register(second)
    broadcaster.submit("a")
    broadcaster.submit("b")
    assert [first.get_nowait(), first.get_nowait()] == ["a", "b"]
    assert [second.get_nowait(), second.get_nowait()] == ["a", "b"]


def test_register_twice_delivers_once():
    broadcaster = Broadcaster()
    listener = queue.Queue()
    broadcaster.register(listener)
    broadcaster.register(listener)
    broadcaster.submit("x")
    assert listener.qsize() == 1


def test_unregister_stops_delivery():
    broadcaster = Broadcaster()
    kept, dropped = queue.Queue(), queue.Queue()
    broadcaster.register(kept)
    broadcaster.register(dropped)
    broadcaster.unregister(dropped)
    broadcaster.submit("x")
    assert kept.get_nowait() == "x"
    assert dropped.empty()


def test_close_ends_listeners_and_refuses_more():
    broadcaster = Broadcaster()
    listener = queue.Queue()
    broadcaster.register(listener)
    broadcaster.close()
    assert listener.get_nowait() is CLOSED
    assert broadcaster.closed
    with pytest.raises(RuntimeError):
        broadcaster.submit("late")
    with pytest.raises(RuntimeError):
        broadcaster.register(queue.Queue())


def test_registry_reuses_rooms():
    registry = RoomRegistry()
    assert registry.room("a") is registry.room("a")
    assert registry.room("a") is not registry.room("b")


def test_open_listener_receives_room_messages_only():
    registry = RoomRegistry()
    in_a = registry.open_listener("a")
    in_b = registry.open_listener("b")
    registry.room("a").submit("hello")
    assert in_a.get_nowait() == "hello"
    assert in_b.empty()


def test_close_listener_marks_end_and_detaches():
    registry = RoomRegistry()
    listener = registry.open_listener("a")
    registry.close_listener("a", listener)
    registry.room("a").submit("after")
    assert listener.get_nowait() is CLOSED
    assert listener.empty()


def test_delete_closes_room_and_makes_a_fresh_one():
    registry = RoomRegistry()
    old = registry.room("a")
    listener = registry.open_listener("a")
    registry.delete("a")
    assert listener.get_nowait() is CLOSED
    with pytest.raises(RuntimeError):
        old.submit("x")
    fresh = registry.room("a")
    assert fresh is not old and not fresh.closed