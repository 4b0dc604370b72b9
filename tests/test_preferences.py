import pytest

from errors import InternalError, ValidationError
from preferences import PreferenceStore, ProposalCursor


def test_rank_table_from_proposee_lists(example_store):
    # X prefers B, then A, then C
    assert example_store.rank_of(0, 1) == 0
    assert example_store.rank_of(0, 0) == 1
    assert example_store.rank_of(0, 2) == 2
    assert example_store.rank_of(1, 0) == 0


def test_preference_and_position(example_store):
    assert list(example_store.preference_of(1)) == [1, 0, 2]
    assert example_store.position_of(1, 1) == 0
    assert example_store.position_of(1, 2) == 2


def test_prefers_is_strict(example_store):
    assert example_store.prefers(0, 1, 0)
    assert not example_store.prefers(0, 0, 1)
    assert not example_store.prefers(0, 0, 0)


def test_proposee_preferences_round_trip(example_store):
    assert example_store.proposee_preferences().tolist() == [
        [1, 0, 2],
        [0, 1, 2],
        [0, 1, 2],
    ]


def test_store_is_read_only(example_store):
    with pytest.raises(ValueError):
        example_store.prefP[0, 0] = 2
    with pytest.raises(ValueError):
        example_store.rankS[0, 0] = 2


def test_empty_store():
    store = PreferenceStore([], [])
    assert store.n == 0


@pytest.mark.parametrize(
    "prefP, prefS",
    [
        ([[0, 0], [0, 1]], [[0, 1], [1, 0]]),
        ([[0, 2], [0, 1]], [[0, 1], [1, 0]]),
        ([[0], [0, 1]], [[0, 1], [1, 0]]),
        ([[0, 1], [0, 1]], [[0, 1]]),
        ([[0, 1], [1, 0]], [[0, 1], [-1, 0]]),
    ],
)
def test_construction_rejects_non_permutations(prefP, prefS):
    with pytest.raises(ValidationError) as e:
        PreferenceStore(prefP, prefS)
    assert e.value.kind == "validation"
    assert e.value.problems


def test_cursor_advances_monotonically(example_store):
    cursor = ProposalCursor(example_store)
    assert cursor.next_proposal(1) == 1
    assert cursor.next_proposal(1) == 0
    assert cursor.position(1) == 2
    assert cursor.position(0) == 0
    assert cursor.total() == 2


def test_cursor_exhausted_is_internal_error():
    store = PreferenceStore([[0]], [[0]])
    cursor = ProposalCursor(store)
    assert cursor.next_proposal(0) == 0
    with pytest.raises(InternalError) as e:
        cursor.next_proposal(0)
    assert e.value.kind == "internal"
