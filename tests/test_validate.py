import pytest

import data
import validate
from errors import ValidationError


def test_valid_preferences():
    assert validate.validate([[1, 2], [2, 1]], [[2, 1], [1, 2]], 2) == []


def test_duplicates():
    problems = validate.validate([[1, 1], [2, 1]], [[2, 1], [1, 2]], 2)
    assert problems == ["proposer 1: preference 1 is repeated"]


def test_out_of_range():
    problems = validate.validate([[1, 2], [2, 1]], [[0, 1], [1, 3]], 2)
    assert problems == [
        "proposee 1: preference 0 is not between 1 and 2",
        "proposee 2: preference 3 is not between 1 and 2",
    ]


def test_wrong_length():
    problems = validate.validate([[1, 2, 3], [2, 1]], [[2, 1], [1, 2]], 2)
    assert problems == ["proposer 1: has 3 preferences, expected 2"]


def test_counts_must_match():
    problems = validate.validate([[1, 2], [2, 1]], [[1, 2]], 2)
    assert problems == ["1 proposees do not match the number of matches 2"]


def test_missing_preferences():
    assert validate.validate(None, [[1]], 1) == ["preferences can not be null or empty"]
    assert validate.permutation_problems(None, 1) == ["preferences can not be empty"]


def test_ensure_valid_raises_with_every_problem():
    with pytest.raises(ValidationError) as e:
        validate.ensure_valid([[1, 1], [3, 1]], [[2, 1], [1, 2]], 2)
    assert len(e.value.problems) == 2
    assert e.value.kind == "validation"


def test_zero_based():
    assert validate.validate([[0, 1], [1, 0]], [[1, 0], [0, 1]], 2, base=0) == []
    assert validate.validate([[1, 2], [1, 0]], [[1, 0], [0, 1]], 2, base=0) != []


def test_check_bijection():
    assert validate.check_bijection([1, 0], [1, 0]) == []
    assert validate.check_bijection([1, None], [0, None]) == [
        "proposer 0 matched to 1 but proposee 1 matched to None",
        "proposer 1 is unmatched",
        "proposee 1 is unmatched",
    ]


def test_blocking_pairs(example_store):
    assert validate.blocking_pairs(example_store, [0, 1, 2]) == []
    assert validate.blocking_pairs(example_store, [1, 0, 2]) == []

    # A / Z, B / Y, C / X: A and X, A and Y prefer each other
    assert validate.blocking_pairs(example_store, [2, 1, 0]) == [(0, 0), (0, 1)]
    assert not validate.is_stable(example_store, [2, 1, 0])


def test_verify(example_text):
    instance = data.parse_instance(example_text)
    assert validate.verify(instance, ["A / X", "B / Y", "C / Z"]) == []
    assert validate.verify(instance, ["A / Y", "B / X", "C / Z"]) == []


def test_verify_reports_shared_proposee(example_text):
    instance = data.parse_instance(example_text)
    problems = validate.verify(instance, ["A / X", "B / X", "C / Z"])
    assert problems == ["Two proposers with same proposee (X): A and B"]


def test_verify_reports_blocking_pairs(example_text):
    instance = data.parse_instance(example_text)
    problems = validate.verify(instance, ["A / Z", "B / Y", "C / X"])
    assert problems[0] == "Blocking pair found: (A, X) over (A, Z) and (X, C)"
    assert len(problems) == 2
