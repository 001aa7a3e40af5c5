"""Tests for file system nodes.

Nodes form a tree: each has at most one parent, containers hold
uniquely named children, and a node's path is rebuilt from its
ancestors every time it is asked for.
"""

import pytest

from blote.fs.nodes import SEPARATOR, Directory, HomeDirectory, Node, TextFile


def _tree() -> tuple[Directory, Directory, HomeDirectory]:
    """Build ``/home/alice`` and return (root, home, alice)."""
    root = Directory(0, SEPARATOR)
    home = Directory(1, "home")
    alice = HomeDirectory(2, "alice", owner="alice")
    root.add_child(home)
    home.add_child(alice)
    return root, home, alice


class TestParentLinks:
    """Verify parent/child wiring."""

    def test_root_has_no_parent(self) -> None:
        """A detached node is a root."""
        root, _home, _alice = _tree()
        assert not root.has_parent()
        assert root.parent is None

    def test_add_child_sets_parent(self) -> None:
        """Adding a child should point its parent link back."""
        root, home, _alice = _tree()
        assert home.has_parent()
        assert home.parent is root

    def test_get_child_by_name(self) -> None:
        """Children are looked up by exact name."""
        _root, home, alice = _tree()
        assert home.get_child("alice") is alice

    def test_get_unknown_child_returns_none(self) -> None:
        """An unknown name is reported as None, never raised."""
        _root, home, _alice = _tree()
        assert home.get_child("nobody") is None
        assert home.get_child("Alice") is None

    def test_duplicate_name_raises(self) -> None:
        """Sibling names must be unique."""
        _root, home, _alice = _tree()
        with pytest.raises(FileExistsError):
            home.add_child(Directory(9, "alice"))

    def test_attached_node_cannot_be_added_again(self) -> None:
        """A node belongs to exactly one parent."""
        root, _home, alice = _tree()
        with pytest.raises(ValueError, match="already attached"):
            root.add_child(alice)

    def test_leaf_cannot_hold_children(self) -> None:
        """Adding under a leaf should fail."""
        leaf = TextFile(5, "notes.txt", "hi")
        with pytest.raises(NotADirectoryError):
            leaf.add_child(Node(6, "x"))
        assert leaf.get_child("x") is None
        assert not leaf.has_children()


class TestPaths:
    """Verify derived paths."""

    def test_root_path_is_separator(self) -> None:
        """The root's path is the separator alone."""
        root, _home, _alice = _tree()
        assert root.path == SEPARATOR

    def test_child_of_root_path(self) -> None:
        """Children of the root get a single leading separator."""
        _root, home, _alice = _tree()
        assert home.path == "/home"

    def test_path_is_parent_path_plus_name(self) -> None:
        """Deeper nodes append separator and name to the parent's path."""
        _root, home, alice = _tree()
        assert alice.path == home.path + SEPARATOR + alice.name

    def test_path_tracks_parent_changes(self) -> None:
        """The path is derived, so it follows the current parent link."""
        _root, _home, alice = _tree()
        notes = TextFile(7, "notes.txt")
        alice.add_child(notes)
        assert notes.path == "/home/alice/notes.txt"


class TestIdentityAndOrdering:
    """Verify equality, hashing and name ordering."""

    def test_equality_uses_id(self) -> None:
        """Two nodes with the same id are equal."""
        assert Node(1, "a") == Node(1, "b")
        assert Node(1, "a") != Node(2, "a")

    def test_nodes_are_hashable(self) -> None:
        """Nodes can be set members."""
        assert len({Node(1, "a"), Node(1, "a"), Node(2, "b")}) == 2

    def test_children_sorted_by_name(self) -> None:
        """Listings come out in name order regardless of insertion order."""
        directory = Directory(0, SEPARATOR)
        for node_id, name in [(3, "zeta"), (1, "alpha"), (2, "mid")]:
            directory.add_child(Node(node_id, name))
        assert [c.name for c in directory.children] == ["alpha", "mid", "zeta"]

    def test_ordering_against_other_types(self) -> None:
        """Comparing with a non-node is unsupported, not a crash."""
        assert Node(1, "a").__lt__("b") is NotImplemented
        with pytest.raises(TypeError):
            _ = Node(1, "a") < "b"

    def test_invalid_names_rejected(self) -> None:
        """Names must be non-empty and separator-free."""
        with pytest.raises(ValueError, match="Invalid node name"):
            Node(1, "")
        with pytest.raises(ValueError, match="Invalid node name"):
            Node(1, "a/b")


class TestHomeDirectory:
    """Verify ownership tagging."""

    def test_owner(self) -> None:
        """A home directory records its owner."""
        _root, _home, alice = _tree()
        assert alice.owner == "alice"
        assert alice.is_owned_by("alice")

    def test_not_owned_by_others(self) -> None:
        """Other users and anonymous sessions do not own it."""
        _root, _home, alice = _tree()
        assert not alice.is_owned_by("bob")
        assert not alice.is_owned_by(None)
