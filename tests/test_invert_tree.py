import pytest

from banking.invert_tree import TreeNode, arr_to_tree, invert_tree, main, tree_to_arr


def test_invert_complete_tree():
    root = arr_to_tree([5, 3, 8, 1, 7, 2, 6])
    assert tree_to_arr(invert_tree(root)) == [5, 8, 3, 6, 2, 7, 1]


def test_invert_uneven_tree():
    root = arr_to_tree([5, 3, 8, 1, 7, 2, 6, 100, 3, -1])
    assert tree_to_arr(invert_tree(root)) == [
        5, 8, 3, 6, 2, 7, 1, None, None, None, None, None, -1, 3, 100,
    ]


def test_invert_twice_is_identity():
    arr = [6, 8, 9]
    root = arr_to_tree(arr)
    assert tree_to_arr(invert_tree(invert_tree(root))) == arr


def test_invert_mutates_and_returns_root():
    root = TreeNode(1, TreeNode(2), TreeNode(3))
    result = invert_tree(root)
    assert result is root
    assert root.left.val == 3
    assert root.right.val == 2


def test_invert_empty():
    assert invert_tree(None) is None
    assert tree_to_arr(invert_tree(arr_to_tree([]))) == []


@pytest.mark.parametrize(
    "arr",
    [[1], [1, None, 2, 3], [5, 3, 8, 1, 7, 2, 6], [1, 2, None, 3]],
)
def test_round_trip(arr):
    assert tree_to_arr(arr_to_tree(arr)) == arr


def test_none_root_gives_no_tree():
    assert arr_to_tree([None, 1, 2]) is None


def test_tree_to_arr_of_none():
    assert tree_to_arr(None) == []


def test_orphan_values_rejected():
    with pytest.raises(ValueError):
        arr_to_tree([1, None, None, 2])


def test_main_prints_examples(capsys):
    assert main([]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 4
    assert lines[0].startswith("q1:[5 3 8 1 7 2 6] ANS: ")
    assert lines[1].startswith("q2: [6 8 9] ANS: ")
    assert lines[3] == "q1: [] ANS: []"