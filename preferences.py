"""
ranked preferences of both sides, and the proposal cursor of each proposer

identifiers are 0-based here: proposers and proposees are 0..n-1
"""
import numpy as np

import validate
from errors import InternalError


class PreferenceStore:
    """
    prefP[p] = proposees in the order p prefers them
    rankS[q][p] = rank of p in the list of q (0 is best)

    Both arrays are read-only once built.
    """

    def __init__(self, proposer_preferences, proposee_preferences):
        n = len(proposer_preferences)
        validate.ensure_valid(proposer_preferences, proposee_preferences, n, base=0)

        self.n = n
        self.prefP = np.array(proposer_preferences, dtype=int).reshape(n, n)
        prefS = np.array(proposee_preferences, dtype=int).reshape(n, n)

        # the inverse of a permutation is its argsort
        self.rankS = np.argsort(prefS, axis=1)
        self.rankP = np.argsort(self.prefP, axis=1)

        for a in (self.prefP, self.rankS, self.rankP):
            a.flags.writeable = False

    def preference_of(self, p):
        return self.prefP[p]

    def rank_of(self, q, p):
        return int(self.rankS[q, p])

    def prefers(self, q, p, other):
        """True if q strictly prefers p to other"""
        return bool(self.rankS[q, p] < self.rankS[q, other])

    def position_of(self, p, q):
        return int(self.rankP[p, q])

    def proposee_preferences(self):
        return np.argsort(self.rankS, axis=1)

    def __repr__(self):
        return "PreferenceStore(n={})".format(self.n)


class ProposalCursor:
    # propP[p] = rank of the next proposal from p
    def __init__(self, store):
        self.store = store
        self.propP = [0] * store.n

    def next_proposal(self, p):
        if self.propP[p] >= self.store.n:
            raise InternalError(
                "proposer {} has already proposed to all {} proposees".format(
                    p, self.store.n
                )
            )
        q = int(self.store.preference_of(p)[self.propP[p]])
        self.propP[p] += 1
        return q

    def position(self, p):
        return self.propP[p]

    def total(self):
        return sum(self.propP)
