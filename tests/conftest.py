import itertools

import matplotlib

matplotlib.use("Agg")

import pytest

import validate
from preferences import PreferenceStore

# proposers A, B, C over proposees X, Y, Z
EXAMPLE = """3
A
B
C
1 2 3
2 1 3
1 2 3
X
Y
Z
2 1 3
1 2 3
1 2 3
"""


@pytest.fixture
def example_text():
    return EXAMPLE


@pytest.fixture
def example_lines():
    return EXAMPLE.splitlines()


@pytest.fixture
def example_store():
    return PreferenceStore(
        [[0, 1, 2], [1, 0, 2], [0, 1, 2]],
        [[1, 0, 2], [0, 1, 2], [0, 1, 2]],
    )


def stable_matchings(store):
    """every stable matching, by brute force"""
    return [
        list(perm)
        for perm in itertools.permutations(range(store.n))
        if validate.is_stable(store, list(perm))
    ]
