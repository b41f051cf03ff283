"""
MCTS AI for Coup.

UCB1 tree search with a depth-aware transposition table, heuristic/random
rollouts with a mercy rule, and pruning of statistically weak branches.
The tree is reused across real turns.
"""

from coup.ai.mcts import MCTS, first_active_player
from coup.ai.mcts_node import Node
from coup.ai.transposition import TranspositionTable, TranspositionEntry
from coup.ai.policies import RandomResolutionPolicy
from coup.ai.constants import (
    MCTS_NUM_SIMULATIONS,
    MCTS_MAX_DEPTH,
    MCTS_EXPLORATION_CONSTANT,
)

__all__ = [
    'MCTS',
    'Node',
    'TranspositionTable',
    'TranspositionEntry',
    'RandomResolutionPolicy',
    'first_active_player',
    'MCTS_NUM_SIMULATIONS',
    'MCTS_MAX_DEPTH',
    'MCTS_EXPLORATION_CONSTANT',
]
