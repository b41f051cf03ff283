from coup.ai.mcts_node import Node
from coup.ai.transposition import TranspositionTable, TranspositionEntry


def test_lookup_missing_hash_returns_none():
    table = TranspositionTable()
    assert table.lookup(123) is None
    assert table.stats()['misses'] == 1


def test_store_then_lookup():
    table = TranspositionTable()
    node = Node()
    table.store(42, TranspositionEntry(node, 5, 1.5))

    entry = table.lookup(42)

    assert entry.node is node
    assert entry.depth == 5
    assert entry.score == 1.5
    assert 42 in table
    assert table.stats()['hits'] == 1


def test_store_overwrites_same_hash():
    table = TranspositionTable()
    table.store(7, TranspositionEntry(Node(), 8, 0.0))
    newer = Node()
    table.store(7, TranspositionEntry(newer, 3, 2.0))

    assert len(table) == 1
    assert table.lookup(7).node is newer
    assert table.lookup(7).depth == 3


def test_depth_requirement_for_reuse():
    max_depth = 10
    shallow = TranspositionEntry(Node(), 3, 0.0)
    deeper = TranspositionEntry(Node(), 5, 0.0)

    # depth-3 entry cannot serve a walk that still has 8 plies to go
    assert not shallow.covers(8)
    assert not shallow.covers(max_depth - 3)
    assert shallow.covers(3)

    assert deeper.covers(max_depth - 5)
    assert not deeper.covers(max_depth - 4)


def test_lru_eviction():
    table = TranspositionTable(max_size=2)
    table.store(1, TranspositionEntry(Node(), 1, 0.0))
    table.store(2, TranspositionEntry(Node(), 1, 0.0))
    table.lookup(1)
    table.store(3, TranspositionEntry(Node(), 1, 0.0))

    assert 1 in table
    assert 2 not in table
    assert 3 in table


def test_clear_resets_entries_and_counters():
    table = TranspositionTable()
    table.store(1, TranspositionEntry(Node(), 1, 0.0))
    table.lookup(1)
    table.lookup(2)

    table.clear()

    assert len(table) == 0
    assert table.stats() == {'hits': 0, 'misses': 0, 'size': 0, 'max_size': table.max_size, 'hit_rate': 0.0}
