import numpy as np

import validate
import popularities as pop


def test_generate_logpop():
    np.random.seed(1)
    logpop = pop.generate_logpop(5)
    assert logpop.shape == (5, 5)
    # without shared interests the first pair is the most popular
    logpop = pop.generate_logpop(5, percent=0)
    assert logpop.argmax() == 0


def test_draw_pref_is_permutation():
    np.random.seed(2)
    pref = pop.draw_pref(np.zeros(7))
    assert sorted(pref) == list(range(7))


def test_draw_profile():
    np.random.seed(3)
    prefP, prefS = pop.draw_profile(np.zeros((4, 4)))
    assert len(prefP) == len(prefS) == 4
    assert all(sorted(pr) == [0, 1, 2, 3] for pr in prefP + prefS)


def test_random_instance_is_valid():
    np.random.seed(4)
    instance = pop.random_instance(6)
    assert instance["nb_matches"] == 6
    assert instance["proposer_names"][0] == "proposer_1"
    assert instance["proposee_names"][5] == "proposee_6"
    assert (
        validate.validate(
            instance["proposer_preferences"], instance["proposee_preferences"], 6
        )
        == []
    )


def test_random_instance_from_logpop():
    np.random.seed(5)
    instance = pop.random_instance(3, logpop=np.zeros((3, 3)))
    assert len(instance["proposee_preferences"]) == 3
