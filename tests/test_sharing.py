"""Structural sharing and allocation guarantees across tree versions."""

import pytest

from puretreelib import TreeNode
from tree_builders import CountingNode, all_nodes, build_sample_tree, payloads


def new_nodes(old_root, new_root):
    """Nodes reachable from new_root that are not instances from old_root."""
    old_ids = {id(node) for node in all_nodes(old_root)}
    return [node for node in all_nodes(new_root) if id(node) not in old_ids]


@pytest.fixture
def counting_tree():
    tree = build_sample_tree(CountingNode)
    CountingNode.created = 0
    return tree


class TestNoOpEdits:
    """Edits that change nothing hand back the original instance."""

    @pytest.mark.parametrize("path", [[], [0], [2, 1], [0, 2]])
    def test_identity_transform(self, sample_tree, path):
        assert sample_tree.transform(path, lambda node: node) is sample_tree

    def test_noop_allocates_nothing(self, counting_tree):
        same = counting_tree.locate([2, 0])
        result = counting_tree.transform([2], CountingNode.set_child_at, 0, same)
        assert result is counting_tree
        assert CountingNode.created == 0


class TestPathBoundedAllocation:
    """An edit at depth d builds at most d + 1 nodes."""

    @pytest.mark.parametrize("path", [[], [1], [0, 2], [2, 1]])
    def test_payload_edit_allocation(self, counting_tree, path):
        counting_tree.transform(path, CountingNode.set_payload, "edited")
        assert CountingNode.created == len(path) + 1

    def test_insert_allocation(self, counting_tree):
        child = CountingNode("1.1.4")
        CountingNode.created = 0

        new = counting_tree.transform([0], CountingNode.insert_child_at, 3, child)

        assert CountingNode.created == 2
        assert len(new_nodes(counting_tree, new)) == 3  # two rebuilt plus the inserted child

    def test_off_path_subtrees_shared(self, sample_tree):
        new = sample_tree.transform([2, 1], TreeNode.set_payload, "x")
        rebuilt = new_nodes(sample_tree, new)
        assert payloads(rebuilt) == ["1", "1.3", "x"]
        assert new.get_child_at(0) is sample_tree.get_child_at(0)
        assert new.get_child_at(1) is sample_tree.get_child_at(1)
        assert new.locate([2, 0]) is sample_tree.locate([2, 0])


class TestVersionsCoexist:
    """Old versions stay valid after new ones are derived."""

    def test_original_unchanged(self, sample_tree):
        before = payloads(all_nodes(sample_tree))
        size, height = sample_tree.size, sample_tree.height

        v2 = sample_tree.transform([0], TreeNode.remove_child_at, 0)
        v3 = v2.transform([], TreeNode.add_child, TreeNode("1.4", [TreeNode("1.4.1")]))

        assert payloads(all_nodes(sample_tree)) == before
        assert (sample_tree.size, sample_tree.height) == (size, height)
        assert v2.size == 8
        assert v3.size == 10
        assert v3.height == 2

    def test_memo_reused_on_shared_subtrees(self, sample_tree):
        sample_tree.size
        new = sample_tree.transform([1], TreeNode.set_payload, "x")
        assert not new.has_size()
        assert new.get_child_at(0).has_size()
        assert new.size == 9

    def test_same_subtree_under_two_roots(self):
        shared = TreeNode("lib", [TreeNode("a"), TreeNode("b")])
        v1 = TreeNode("v1", [shared])
        v2 = TreeNode("v2", [shared, TreeNode("extra")])

        edited = v2.transform([0, 1], TreeNode.set_payload, "B")

        assert v1.locate([0, 1]).payload == "b"
        assert edited.locate([0, 1]).payload == "B"
        assert edited.locate([0, 0]) is shared.get_child_at(0)


@pytest.mark.slow
class TestLargeTrees:
    """Allocation stays proportional to edit depth on big trees."""

    def test_deep_edit_allocates_only_path(self):
        chain = CountingNode("bottom")
        for level in range(200):
            chain = CountingNode(level, [chain])
        fan = CountingNode("fan", [CountingNode(i) for i in range(20000)])
        root = CountingNode("root", [fan, chain])
        CountingNode.created = 0

        path = [1] + [0] * 200
        new = root.transform(path, CountingNode.set_payload, "edited")

        assert CountingNode.created == len(path) + 1
        assert new.get_child_at(0) is fan
        assert new.locate(path).payload == "edited"
        assert new.size == root.size

    def test_many_versions_share_siblings(self):
        root = build_sample_tree()
        versions = [root]
        for i in range(1000):
            versions.append(
                versions[-1].transform([0], TreeNode.set_payload, f"v{i}")
            )

        for version in versions:
            assert version.get_child_at(2) is root.get_child_at(2)
        assert versions[-1].get_child_at(0).payload == "v999"
        assert root.get_child_at(0).payload == "1.1"
