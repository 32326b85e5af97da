"""Binary tree inversion with level-order array conversion."""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass
class TreeNode:
    val: int
    left: TreeNode | None = None
    right: TreeNode | None = None


def invert_tree(root: TreeNode | None) -> TreeNode | None:
    """Swap the children of every node, in place, and return the root."""
    if root is None:
        return None
    queue = deque([root])
    while queue:
        node = queue.popleft()
        node.left, node.right = node.right, node.left
        queue.extend(child for child in (node.left, node.right) if child is not None)
    return root


def arr_to_tree(arr: Sequence[int | None]) -> TreeNode | None:
    """Build a tree from a level-order list in which ``None`` marks a missing node."""
    if not arr or arr[0] is None:
        return None

    root = TreeNode(arr[0])
    queue = deque([root])
    values = iter(arr[1:])
    for left in values:
        if not queue:
            raise ValueError("level-order list has values with no parent node")
        node = queue.popleft()
        if left is not None:
            node.left = TreeNode(left)
            queue.append(node.left)
        right = next(values, None)
        if right is not None:
            node.right = TreeNode(right)
            queue.append(node.right)
    return root


def tree_to_arr(root: TreeNode | None) -> list[int | None]:
    """Return the level-order list of a tree with trailing ``None`` entries removed."""
    result: list[int | None] = []
    if root is None:
        return result

    queue: deque[TreeNode | None] = deque([root])
    while queue:
        node = queue.popleft()
        if node is None:
            result.append(None)
        else:
            result.append(node.val)
            queue.append(node.left)
            queue.append(node.right)

    while result and result[-1] is None:
        result.pop()
    return result


def _format(values: Sequence[int | None]) -> str:
    return "[" + " ".join("<nil>" if v is None else str(v) for v in values) + "]"


def main(argv: Sequence[str] | None = None) -> int:
    """Print the inversions of a few sample trees."""
    examples = [
        ("q1:", [5, 3, 8, 1, 7, 2, 6]),
        ("q2: ", [6, 8, 9]),
        ("q3: ", [5, 3, 8, 1, 7, 2, 6, 100, 3, -1]),
        ("q1: ", []),
    ]
    for label, values in examples:
        answer = tree_to_arr(invert_tree(arr_to_tree(values)))
        print(f"{label}{_format(values)} ANS: {_format(answer)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())