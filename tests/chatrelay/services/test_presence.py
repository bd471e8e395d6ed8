from chatrelay.services.presence import PresenceRegistry, User


def test_activate_inserts_and_returns_user() -> None:
    registry = PresenceRegistry()

    user = registry.activate("c1", "Alice", "lobby")

    assert user == User(id="c1", name="Alice", room="lobby")
    assert registry.lookup("c1") == user
    assert len(registry) == 1


def test_reactivate_replaces_entry_for_same_connection() -> None:
    registry = PresenceRegistry()
    registry.activate("c1", "Alice", "lobby")
    registry.activate("c2", "Bob", "lobby")

    registry.activate("c1", "Alicia", "den")

    assert len(registry) == 2
    assert registry.lookup("c1") == User(id="c1", name="Alicia", room="den")
    assert [u.id for u in registry.members_of("lobby")] == ["c2"]
    assert [u.id for u in registry.users()] == ["c2", "c1"]


def test_lookup_missing_connection_returns_none() -> None:
    assert PresenceRegistry().lookup("nobody") is None


def test_remove_is_idempotent() -> None:
    registry = PresenceRegistry()
    registry.activate("c1", "Alice", "lobby")
    registry.activate("c2", "Bob", "den")

    registry.remove("c1")
    once = registry.users()
    registry.remove("c1")

    assert registry.users() == once
    assert "c1" not in registry
    registry.remove("never-joined")


def test_members_of_tracks_last_activation() -> None:
    registry = PresenceRegistry()
    registry.activate("a", "Alice", "lobby")
    registry.activate("b", "Bob", "lobby")
    registry.activate("c", "Cleo", "den")
    registry.activate("b", "Bob", "den")
    registry.remove("c")

    assert {u.id for u in registry.members_of("lobby")} == {"a"}
    assert {u.id for u in registry.members_of("den")} == {"b"}
    assert registry.members_of("attic") == []


def test_active_room_names_never_include_empty_rooms() -> None:
    registry = PresenceRegistry()
    registry.activate("a", "Alice", "lobby")
    registry.activate("b", "Bob", "den")
    assert registry.active_room_names() == {"lobby", "den"}

    registry.activate("a", "Alice", "den")
    assert registry.active_room_names() == {"den"}

    registry.remove("a")
    registry.remove("b")
    assert registry.active_room_names() == set()


def test_at_most_one_entry_per_connection_over_mixed_operations() -> None:
    registry = PresenceRegistry()
    ops = [
        ("activate", "a", "lobby"),
        ("activate", "b", "lobby"),
        ("activate", "a", "den"),
        ("remove", "b", None),
        ("activate", "b", "den"),
        ("activate", "a", "lobby"),
        ("remove", "a", None),
        ("activate", "a", "attic"),
    ]
    for op, cid, room in ops:
        if op == "activate":
            registry.activate(cid, cid.upper(), room)
        else:
            registry.remove(cid)
        ids = [u.id for u in registry.users()]
        assert len(ids) == len(set(ids))

    assert {u.id: u.room for u in registry.users()} == {"b": "den", "a": "attic"}
