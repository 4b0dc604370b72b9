"""
proposer-proposing deferred acceptance
takes as input complete, strict preference lists of equal size
"""
import logging
from collections import deque, namedtuple

from preferences import ProposalCursor

logger = logging.getLogger(__name__)

# evicted is the proposer q dropped to accept, or None
ProposalEvent = namedtuple("ProposalEvent", "proposer proposee accepted evicted")


def deferred_acceptance(store, trace=None):
    n = store.n
    cursor = ProposalCursor(store)

    # matchP[p] = tentative match of p, matchS[q] = tentative match of q
    matchP = [None] * n
    matchS = [None] * n

    # free proposers, the head keeps proposing until accepted
    available = deque(range(n))
    proposals = 0

    while available:
        p = available[0]
        q = cursor.next_proposal(p)
        proposals += 1
        current = matchS[q]

        if current is None:
            accepted, evicted = True, None
        elif store.prefers(q, p, current):
            accepted, evicted = True, current
            matchP[current] = None
            available.append(current)
        else:
            accepted, evicted = False, None

        if accepted:
            matchP[p] = q
            matchS[q] = p
            available.popleft()

        logger.debug(
            "proposal %d: %d -> %d %s%s",
            proposals,
            p,
            q,
            "accepted" if accepted else "rejected",
            "" if evicted is None else ", %d evicted" % evicted,
        )
        if trace is not None:
            trace.append(ProposalEvent(p, q, accepted, evicted))

    logger.info("matched %d pairs after %d proposals", n, proposals)
    return matchP, matchS
