"""
Transposition table for the MCTS selection walk.

Maps a game-state digest to the tree node last reached for that state and
the depth it was recorded at, so converging move sequences can share a
subtree.
"""
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Optional

from coup.ai.mcts_node import Node
from coup.ai.constants import MCTS_TRANSPOSITION_TABLE_SIZE


@dataclass
class TranspositionEntry:
    node: Node
    depth: int
    score: float

    def covers(self, remaining_depth: int) -> bool:
        """An entry is reusable only if it was recorded with at least the remaining search budget."""
        return self.depth >= remaining_depth


class TranspositionTable:
    """
    LRU-bounded mapping from state hash to TranspositionEntry.

    One entry per hash; storing again overwrites the previous entry.
    """

    def __init__(self, max_size: int = MCTS_TRANSPOSITION_TABLE_SIZE):
        self.max_size = max_size
        self.entries: OrderedDict[int, TranspositionEntry] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def lookup(self, state_hash: int) -> Optional[TranspositionEntry]:
        entry = self.entries.get(state_hash)
        if entry is None:
            self.misses += 1
            return None
        self.entries.move_to_end(state_hash)
        self.hits += 1
        return entry

    def store(self, state_hash: int, entry: TranspositionEntry) -> None:
        if state_hash in self.entries:
            self.entries.pop(state_hash)
        elif len(self.entries) >= self.max_size:
            self.entries.popitem(last=False)
        self.entries[state_hash] = entry

    def clear(self) -> None:
        self.entries.clear()
        self.hits = 0
        self.misses = 0

    def stats(self) -> Dict[str, float]:
        total = self.hits + self.misses
        return {
            'hits': self.hits,
            'misses': self.misses,
            'size': len(self.entries),
            'max_size': self.max_size,
            'hit_rate': self.hits / total if total > 0 else 0.0,
        }

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, state_hash: int) -> bool:
        return state_hash in self.entries
