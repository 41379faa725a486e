"""Tests for structural editing: every edit returns a new node."""

import pytest

from puretreelib import TreeNode, EditOperation, IndexOutOfRange, TypeMismatch


class LabelledNode(TreeNode):
    """Node family with an extra field carried through derive()."""

    def __init__(self, payload=None, children=(), label=None):
        super().__init__(payload, children)
        object.__setattr__(self, 'label', label)

    def _derive_fields(self):
        fields = super()._derive_fields()
        fields['label'] = self.label
        return fields


class TestDerive:
    """The clone-with-override primitive."""

    def test_derive_overrides_payload(self, sample_tree):
        new = sample_tree.derive(payload="root")
        assert new is not sample_tree
        assert new.payload == "root"
        assert new.children == sample_tree.children

    def test_derive_shares_children(self, sample_tree):
        new = sample_tree.derive(payload="root")
        for old_child, new_child in zip(sample_tree.children, new.children):
            assert old_child is new_child

    def test_derive_does_not_copy_memos(self, sample_tree):
        sample_tree.size
        new = sample_tree.derive(payload="root")
        assert not new.has_size()
        assert new.size == sample_tree.size

    def test_derive_rejects_unknown_fields(self, sample_tree):
        with pytest.raises(TypeError, match="colour"):
            sample_tree.derive(colour="red")

    def test_derive_keeps_subclass_fields(self):
        node = LabelledNode("a", [LabelledNode("b")], label="keep me")
        new = node.set_payload("A")
        assert isinstance(new, LabelledNode)
        assert new.label == "keep me"
        assert new.derive(label="other").label == "other"


class TestSetPayload:

    def test_set_payload(self, sample_tree):
        new = sample_tree.set_payload("one")
        assert new.payload == "one"
        assert sample_tree.payload == "1"
        assert new.children == sample_tree.children

    def test_same_payload_is_noop(self, sample_tree):
        assert sample_tree.set_payload(sample_tree.payload) is sample_tree


class TestAddChildren:

    def test_add_child(self, sample_tree):
        extra = TreeNode("1.4")
        new = sample_tree.add_child(extra)
        assert new.child_count() == 4
        assert new.get_child_at(3) is extra
        assert sample_tree.child_count() == 3

    def test_add_children_appends_in_order(self):
        root = TreeNode("r", [TreeNode("a")])
        new = root.add_children(TreeNode("b"), TreeNode("c"))
        assert [c.payload for c in new.children] == ["a", "b", "c"]

    def test_add_nothing_is_noop(self, sample_tree):
        assert sample_tree.add_children() is sample_tree

    def test_type_mismatch_is_atomic(self, sample_tree):
        good = TreeNode("good")
        with pytest.raises(TypeMismatch):
            sample_tree.add_children(good, "bad")
        assert sample_tree.child_count() == 3

    def test_child_must_match_family(self):
        root = LabelledNode("r")
        with pytest.raises(TypeMismatch):
            root.add_child(TreeNode("plain"))
        assert root.add_child(LabelledNode("ok")).child_count() == 1

    def test_add_child_to_leaf(self):
        leaf = TreeNode("leaf")
        new = leaf.add_child(TreeNode("child"))
        assert leaf.is_leaf()
        assert not new.is_leaf()
        assert new.size == 2


class TestSetChildAt:

    def test_replaces_one_child(self, sample_tree):
        replacement = TreeNode("X")
        new = sample_tree.set_child_at(1, replacement)
        assert new.get_child_at(1) is replacement
        assert new.get_child_at(0) is sample_tree.get_child_at(0)
        assert new.get_child_at(2) is sample_tree.get_child_at(2)
        assert sample_tree.get_child_at(1).payload == "1.2"

    def test_past_end_is_error_not_append(self, sample_tree):
        with pytest.raises(IndexOutOfRange) as exc_info:
            sample_tree.set_child_at(3, TreeNode("X"))
        assert exc_info.value.operation == "set_child_at"

    def test_same_child_is_noop(self, sample_tree):
        same = sample_tree.get_child_at(2)
        assert sample_tree.set_child_at(2, same) is sample_tree

    def test_rejects_non_node(self, sample_tree):
        with pytest.raises(TypeMismatch):
            sample_tree.set_child_at(0, None)


class TestInsertChildAt:

    def test_insert_in_middle(self, sample_tree):
        new = sample_tree.insert_child_at(1, TreeNode("X"))
        assert [c.payload for c in new.children] == ["1.1", "X", "1.2", "1.3"]

    def test_insert_at_front(self, sample_tree):
        new = sample_tree.insert_child_at(0, TreeNode("X"))
        assert new.get_child_at(0).payload == "X"
        assert new.get_child_at(1) is sample_tree.get_child_at(0)

    def test_insert_at_end_appends(self, sample_tree):
        x = TreeNode("X")
        new = sample_tree.insert_child_at(sample_tree.child_count(), x)
        assert new.get_child_at(3) is x

    def test_insert_past_end(self, sample_tree):
        with pytest.raises(IndexOutOfRange) as exc_info:
            sample_tree.insert_child_at(4, TreeNode("X"))
        assert exc_info.value.bound == 4

    def test_insert_rejects_non_node(self, sample_tree):
        with pytest.raises(TypeMismatch):
            sample_tree.insert_child_at(0, 42)


class TestRemoveChildAt:

    def test_remove(self, sample_tree):
        new = sample_tree.remove_child_at(1)
        assert [c.payload for c in new.children] == ["1.1", "1.3"]
        assert new.size == 8
        assert sample_tree.size == 9

    def test_remove_only_child_gives_leaf(self):
        node = TreeNode("p", [TreeNode("c")])
        assert node.remove_child_at(0).is_leaf()

    def test_remove_out_of_range(self, sample_tree):
        with pytest.raises(IndexOutOfRange):
            sample_tree.remove_child_at(3)
        with pytest.raises(IndexOutOfRange):
            TreeNode("leaf").remove_child_at(0)


class TestReplace:

    def test_replace_returns_argument(self, sample_tree):
        other = TreeNode("other")
        assert sample_tree.replace(other) is other
        assert sample_tree.replace("anything") == "anything"


class TestEditOperation:

    def test_members_dispatch_to_methods(self, sample_tree):
        new = EditOperation.REMOVE_CHILD_AT(sample_tree, 0)
        assert new.child_count() == 2

    def test_dispatch_uses_subclass_override(self):
        class UpperNode(TreeNode):
            def set_payload(self, payload):
                return super().set_payload(payload.upper())

        node = UpperNode("a")
        assert EditOperation.SET_PAYLOAD(node, "b").payload == "B"

    def test_every_member_names_a_method(self):
        for operation in EditOperation:
            assert callable(getattr(TreeNode, operation.value))
