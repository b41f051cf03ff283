"""
MCTS Node implementation for Coup.
Each node represents the position reached by playing its action from its parent.
"""
import math
import weakref
from typing import Dict, Iterable, Optional, Set

from coup.models.actions import Action, ActionCode
from coup.ai.constants import MCTS_EXPLORATION_CONSTANT


class Node:
    """
    A node in the MCTS search tree.

    Children are owned through the children mapping; the parent link is a
    weak reference used only to walk back up the tree.

    Attributes:
        action: Action taken to reach this node from parent (None for the root)
        children: Child nodes keyed by action code
        visit_count: Number of backpropagation passes through this node
        reward: Total reward accumulated from simulations
        expanded: Whether children have ever been generated for this node
        pruned_codes: Actions removed by pruning; they are never re-added here
    """

    def __init__(self, action: Optional[Action] = None, parent: Optional['Node'] = None):
        self.action = action
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self.children: Dict[ActionCode, 'Node'] = {}
        self.visit_count = 0
        self.reward = 0
        self.expanded = False
        self.pruned_codes: Set[ActionCode] = set()

    @property
    def parent(self) -> Optional['Node']:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @parent.setter
    def parent(self, node: Optional['Node']) -> None:
        self._parent_ref = weakref.ref(node) if node is not None else None

    def is_leaf(self) -> bool:
        return len(self.children) == 0

    def add_children(self, actions: Iterable[Action]) -> None:
        """
        Attach one child per action and mark the node expanded.

        Actions already present are kept as they are; pruned actions are skipped.
        """
        self.expanded = True
        for action in actions:
            if action.code not in self.children and action.code not in self.pruned_codes:
                self.children[action.code] = Node(action, self)

    def remove_child(self, code: ActionCode) -> Optional['Node']:
        """Detach a child and its subtree; the action stays excluded from this node."""
        child = self.children.pop(code, None)
        if child is not None:
            child.parent = None
            self.pruned_codes.add(code)
        return child

    def increment_visit_count(self) -> None:
        self.visit_count += 1

    def increment_reward(self, delta: int) -> None:
        self.reward += delta

    @property
    def average_reward(self) -> float:
        if self.visit_count == 0:
            return 0.0
        return self.reward / self.visit_count

    def ucb1_value(self, exploration_constant: float = MCTS_EXPLORATION_CONSTANT) -> float:
        """
        UCB1 score of this node.

        UCB1 = reward / visits + c * sqrt(ln(parent visits) / visits)

        Unvisited nodes score +inf so they are explored before any visited
        sibling. The root (or a node whose parent has not been visited yet)
        has no exploration term.

        Args:
            exploration_constant: Balance between exploitation and exploration

        Returns:
            UCB1 value
        """
        if self.visit_count == 0:
            return math.inf
        exploitation = self.reward / self.visit_count
        parent = self.parent
        if parent is None or parent.visit_count == 0:
            return exploitation
        exploration = exploration_constant * math.sqrt(
            math.log(parent.visit_count) / self.visit_count
        )
        return exploitation + exploration

    def select_child(self, exploration_constant: float = MCTS_EXPLORATION_CONSTANT) -> 'Node':
        """
        Select the child with the highest UCB1 value.

        Ties go to the child added first.

        Raises:
            ValueError: If node has no children to select from
        """
        if not self.children:
            raise ValueError("Cannot select child: node has no children")

        best_score = -math.inf
        best_child = None
        for child in self.children.values():
            score = child.ucb1_value(exploration_constant)
            if best_child is None or score > best_score:
                best_score = score
                best_child = child
        return best_child

    def __repr__(self):
        action = self.action.code.name if self.action is not None else None
        return (f"Node(action={action}, visits={self.visit_count}, "
                f"reward={self.reward}, children={len(self.children)})")
