from typing import Callable, Dict, List, Optional

# Return this from a node visit function to abort a tree visit.
STOP = "stop"


class BinaryTreeNode:
    """
    The binary tree node is the base node for expression trees. Children are
    assigned once in the constructor and owned exclusively by this node, so
    a tree is never shared or cyclic.

    Flat input like `1+1+...+1` builds trees as deep as they are long, so
    every traversal walks the tree with an explicit stack rather than the
    call stack.
    """

    left: Optional["BinaryTreeNode"]
    right: Optional["BinaryTreeNode"]

    def __init__(
        self, left: "BinaryTreeNode" = None, right: "BinaryTreeNode" = None,
    ):
        if left is not None and left is right:
            raise ValueError("a node cannot be both children of the same parent")
        self.left = left
        self.right = right

    def copy_node(
        self, left: Optional["BinaryTreeNode"], right: Optional["BinaryTreeNode"]
    ) -> "BinaryTreeNode":
        """Copy this node alone, attaching the given (already copied) children"""
        return self.__class__(left, right)

    def clone(self) -> "BinaryTreeNode":
        """Create a deep copy of this tree"""
        copies: Dict[int, BinaryTreeNode] = {}

        def visit_fn(node, depth, data):
            left = copies.pop(id(node.left)) if node.left is not None else None
            right = copies.pop(id(node.right)) if node.right is not None else None
            copies[id(node)] = node.copy_node(left, right)

        self.visit_postorder(visit_fn)
        return copies[id(self)]

    def is_leaf(self) -> bool:
        """Is this node a leaf?  A node is a leaf if it has no children."""
        return self.left is None and self.right is None

    @property
    def name(self) -> str:
        """Human readable name for this node."""
        return "BinaryTreeNode"

    def visit_preorder(self, visit_fn: Callable, depth: int = 0, data=None):
        """Call `visit_fn(node, depth, data)` for each node, parents before
        their children and left subtrees before right ones.

        Returning `STOP` from `visit_fn` ends the walk and `STOP` is returned.
        """
        stack = [(self, depth)]
        while stack:
            node, level = stack.pop()
            if visit_fn and visit_fn(node, level, data) == STOP:
                return STOP
            if node.right is not None:
                stack.append((node.right, level + 1))
            if node.left is not None:
                stack.append((node.left, level + 1))

    def visit_inorder(self, visit_fn: Callable, depth: int = 0, data=None):
        """Call `visit_fn(node, depth, data)` for each node, after its left
        subtree and before its right one. Stops early on `STOP`."""
        stack: List = []
        node: Optional[BinaryTreeNode] = self
        level = depth
        while stack or node is not None:
            while node is not None:
                stack.append((node, level))
                node, level = node.left, level + 1
            node, level = stack.pop()
            if visit_fn and visit_fn(node, level, data) == STOP:
                return STOP
            node, level = node.right, level + 1

    def visit_postorder(self, visit_fn: Callable, depth: int = 0, data=None):
        """Call `visit_fn(node, depth, data)` for each node once both of its
        subtrees are done, left first. Stops early on `STOP`."""
        stack = [(self, depth, False)]
        while stack:
            node, level, children_done = stack.pop()
            if children_done:
                if visit_fn and visit_fn(node, level, data) == STOP:
                    return STOP
                continue
            stack.append((node, level, True))
            if node.right is not None:
                stack.append((node.right, level + 1, False))
            if node.left is not None:
                stack.append((node.left, level + 1, False))

    def get_children(self) -> List["BinaryTreeNode"]:
        """The children that are present, left first."""
        return [child for child in (self.left, self.right) if child is not None]

    def depth(self) -> int:
        """The number of levels in this tree, counting this node as one."""
        deepest = 0

        def visit_fn(node, depth, data):
            nonlocal deepest
            deepest = max(deepest, depth + 1)

        self.visit_preorder(visit_fn)
        return deepest
