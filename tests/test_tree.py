"""Tests for translation trees: flatten, unflatten and sorting."""
import pytest


def _tree(obj):
    from i18nsheet.parsers.tree import tree_from_json
    return tree_from_json(obj)


class TestTreeFromJSON:
    def test_nested(self):
        from i18nsheet.parsers.tree import Leaf, Node
        tree = _tree({"common": {"hello": "Hola"}, "title": "T"})
        assert isinstance(tree.children["common"], Node)
        assert tree.children["common"].children["hello"] == Leaf("Hola")
        assert tree.children["title"] == Leaf("T")

    def test_root_must_be_object(self):
        with pytest.raises(ValueError):
            _tree(["a", "b"])

    def test_scalars(self):
        from i18nsheet.parsers.tree import Leaf
        tree = _tree({"n": 3, "f": 2.0, "x": 1.5, "b": True, "none": None})
        assert tree.children["n"] == Leaf("3")
        assert tree.children["f"] == Leaf("2")
        assert tree.children["x"] == Leaf("1.5")
        assert tree.children["b"] == Leaf("true")
        assert tree.children["none"] == Leaf("")

    def test_list_keyed_by_index(self):
        from i18nsheet.parsers.tree import flatten
        keys = [e.key for e in flatten(_tree({"days": ["Mon", "Tue"]}))]
        assert keys == ["days.0", "days.1"]


class TestFlatten:
    def test_order_and_paths(self):
        from i18nsheet.parsers.tree import flatten
        tree = _tree({"b": {"y": "1", "x": "2"}, "a": "3"})
        entries = list(flatten(tree))
        assert [e.path for e in entries] == [("b", "y"), ("b", "x"), ("a",)]
        assert [e.key for e in entries] == ["b.y", "b.x", "a"]

    def test_values_trimmed(self):
        from i18nsheet.parsers.tree import flatten
        entries = list(flatten(_tree({"bye": "  Goodbye \n"})))
        assert entries[0].value == "Goodbye"

    def test_dotted_key_rejected(self):
        from i18nsheet.parsers.keypath import KeyPathError
        from i18nsheet.parsers.tree import flatten
        with pytest.raises(KeyPathError):
            list(flatten(_tree({"version": {"v1.2": "x"}})))


class TestUnflatten:
    def test_roundtrip(self):
        from i18nsheet.parsers.tree import flatten, tree_to_json, unflatten
        obj = {
            "common": {"hello": "Hola", "bye": "Adiós"},
            "menu": {"file": {"open": "Abrir", "recent": {"clear": "Limpiar"}}},
            "title": "Bienvenido",
        }
        entries = {e.path: e.value for e in flatten(_tree(obj))}
        assert tree_to_json(unflatten(entries)) == obj

    def test_roundtrip_independent_of_order(self):
        from i18nsheet.parsers.tree import flatten, tree_to_json, unflatten
        obj = {"a": {"x": "1", "y": "2"}, "b": "3"}
        entries = [(e.path, e.value) for e in flatten(_tree(obj))]
        reversed_tree = unflatten(dict(reversed(entries)))
        assert tree_to_json(reversed_tree) == obj

    def test_dotted_string_keys(self):
        from i18nsheet.parsers.tree import tree_to_json, unflatten
        tree = unflatten({"common.hello": "Hello", "title": "T"})
        assert tree_to_json(tree) == {"common": {"hello": "Hello"}, "title": "T"}

    def test_five_levels(self):
        from i18nsheet.parsers.tree import Node, tree_to_json, unflatten
        tree = unflatten({"a.b.c.d.e": "deep"})
        node = tree
        for segment in "abcd":
            node = node.children[segment]
            assert isinstance(node, Node)
        assert node.children["e"].value == "deep"
        assert tree_to_json(tree) == {"a": {"b": {"c": {"d": {"e": "deep"}}}}}

    def test_conflict_leaf_then_nested(self):
        from i18nsheet.parsers.tree import TreeConflictError, unflatten
        with pytest.raises(TreeConflictError) as exc:
            unflatten({"a": "leaf", "a.b": "nested"})
        assert exc.value.path == ("a",)

    def test_conflict_nested_then_leaf(self):
        from i18nsheet.parsers.tree import TreeConflictError, unflatten
        with pytest.raises(TreeConflictError):
            unflatten({"a.b": "nested", "a": "leaf"})

    def test_conflict_is_value_error(self):
        from i18nsheet.parsers.tree import TreeConflictError
        assert issubclass(TreeConflictError, ValueError)


class TestSortTree:
    def test_case_insensitive_every_level(self):
        from i18nsheet.parsers.tree import sort_tree, unflatten
        tree = sort_tree(unflatten({"b.Zeta": "1", "b.alpha": "2", "B2": "3", "a": "4"}))
        assert list(tree.children) == ["a", "b", "B2"]
        assert list(tree.children["b"].children) == ["alpha", "Zeta"]

    def test_same_key_different_case_is_stable(self):
        from i18nsheet.parsers.tree import sort_tree, unflatten
        one = sort_tree(unflatten({"a": "1", "A": "2"}))
        two = sort_tree(unflatten({"A": "2", "a": "1"}))
        assert list(one.children) == list(two.children) == ["A", "a"]
