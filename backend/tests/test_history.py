from rankdown.schemas.snapshot_schemas import EliminationRecord, EliminationMethod
from rankdown.services.history import aggregate_eliminations


def records(*items):
    return [EliminationRecord(name=name, round=rnd) for name, rnd in items]


def names(result):
    return [r.name for r in result]


def test_sorted_by_round_descending_with_stable_ties():
    result = aggregate_eliminations(records(('X', 1), ('Y', 3), ('Z', 3)))
    assert names(result) == ['Y', 'Z', 'X']


def test_missing_round_sorts_last():
    result = aggregate_eliminations(records(('X', None), ('Y', 2)))
    assert names(result) == ['Y', 'X']


def test_missing_round_is_not_rewritten():
    result = aggregate_eliminations(records(('X', None), ('Y', 2)))
    assert result[1].round is None


def test_two_missing_rounds_keep_input_order():
    result = aggregate_eliminations(records(('P', None), ('Q', 1), ('R', None)))
    assert names(result) == ['Q', 'P', 'R']


def test_does_not_deduplicate_or_mutate_input():
    items = records(('X', 1), ('X', 2))
    result = aggregate_eliminations(items)
    assert names(result) == ['X', 'X']
    assert [r.round for r in result] == [2, 1]
    assert [r.round for r in items] == [1, 2]


def test_method_is_carried_through():
    items = [
        EliminationRecord(name='X', round=1, method='leftover'),
        EliminationRecord(name='Y', round=2),
    ]
    result = aggregate_eliminations(items)
    assert [r.method for r in result] == [EliminationMethod.VOTED, EliminationMethod.LEFTOVER]


def test_empty_history():
    assert aggregate_eliminations([]) == []
