import threading

from duelrelay.constants import SIDE_FIRST, SIDE_SECOND


def test_get_or_create_returns_same_room(registry):
    room = registry.get_or_create("abc")
    assert registry.get_or_create("abc") is room
    assert "abc" in registry
    assert len(registry) == 1


def test_join_assigns_first_then_second(registry, make_conn):
    a, b = make_conn("a"), make_conn("b")
    assert registry.join(a, "abc") == SIDE_FIRST
    assert registry.join(b, "abc") == SIDE_SECOND
    assert a.room == "abc"
    room = registry.get("abc")
    assert room.clients == {a, b}
    assert set(room.sides.values()) == {SIDE_FIRST, SIDE_SECOND}


def test_join_full_room_does_not_mutate(registry, make_conn):
    a, b, c = make_conn("a"), make_conn("b"), make_conn("c")
    registry.join(a, "abc")
    registry.join(b, "abc")
    assert registry.join(c, "abc") is None
    room = registry.get("abc")
    assert room.clients == {a, b}
    assert c not in room.sides
    assert c.room is None


def test_leave_frees_side_for_next_joiner(registry, make_conn):
    a, b, c = make_conn("a"), make_conn("b"), make_conn("c")
    registry.join(a, "abc")
    registry.join(b, "abc")
    room = registry.leave(a)
    assert room.clients == {b}
    assert a.room is None
    assert registry.join(c, "abc") == SIDE_FIRST


def test_leave_last_member_removes_room(registry, make_conn):
    a = make_conn("a")
    registry.join(a, "abc")
    room = registry.leave(a)
    assert room.is_empty
    assert "abc" not in registry


def test_leave_twice_is_noop(registry, make_conn):
    a, b = make_conn("a"), make_conn("b")
    registry.join(a, "abc")
    registry.join(b, "abc")
    assert registry.leave(a) is not None
    assert registry.leave(a) is None
    assert registry.get("abc").clients == {b}


def test_remove_if_empty(registry, make_conn):
    registry.get_or_create("empty")
    assert registry.remove_if_empty("empty") is True
    assert registry.remove_if_empty("empty") is False
    a = make_conn("a")
    registry.join(a, "busy")
    assert registry.remove_if_empty("busy") is False
    assert "busy" in registry


def test_member_room_checks_registry_not_cached_code(registry, make_conn):
    a = make_conn("a")
    registry.join(a, "abc")
    assert registry.member_room(a, "abc") is registry.get("abc")
    stale = make_conn("stale")
    stale.room = "abc"
    assert registry.member_room(stale, "abc") is None
    assert registry.side_of(stale, "abc") is None
    assert registry.member_room(a, "other") is None


def test_peers_excludes_sender(registry, make_conn):
    a, b = make_conn("a"), make_conn("b")
    registry.join(a, "abc")
    registry.join(b, "abc")
    assert registry.peers("abc", a) == [b]
    assert registry.peers("missing", a) == []


def test_stats(registry, make_conn):
    registry.join(make_conn(), "one")
    registry.join(make_conn(), "one")
    registry.join(make_conn(), "two")
    assert registry.stats() == {"rooms": 2, "members": 3}


def test_reads_wait_for_registry_lock(registry, make_conn):
    registry.join(make_conn(), "abc")
    seen = []

    def reader():
        seen.append((len(registry), "abc" in registry, registry.get("abc") is not None))

    with registry._lock:
        worker = threading.Thread(target=reader)
        worker.start()
        worker.join(0.05)
        assert worker.is_alive()
        assert seen == []
    worker.join(1)
    assert seen == [(1, True, True)]
