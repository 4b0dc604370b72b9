import sys as sys
import logging

import numpy as np

import data

logger = logging.getLogger(__name__)

"""
Generate a "realistic" popularity profile over n proposers and n proposees
- some proposers are intrinsically more popular
- some proposees are intrinsically more popular
- some proposer-proposee pairs share interests
We define pop[p,q] = popularity p and q give each other

Pr[p prefers q1 to q2] = pop[p,q1] / (pop[p,q1] + pop[p,q2])
Pr[q prefers p1 to p2] = pop[p1,q] / (pop[p1,q] + pop[p2,q])

Multiplying all popularity by a constant
does not change the distribution

Because we deal with large popularity, we store the log
"""


def generate_logpop(n, alpha_proposers=1, alpha_proposees=2, percent=0.05, factor=10):
    logpop = np.zeros((n, n))

    # step 1: some proposers are intrinsically more popular
    for p in range(n):
        logpop[p, :] += np.log(1 / (p + 1) ** alpha_proposers)

    # step 2: some proposees are intrinsically more popular
    for q in range(n):
        logpop[:, q] += np.log(1 / (q + 1) ** alpha_proposees)

    # step 3: some proposer-proposee pairs share interests
    # in that case the mutual popularity is multiplied by the factor
    for _ in range(int(percent * n * n)):
        p, q = np.random.randint([n, n])
        logpop[p, q] += np.log(factor)

    return logpop


"""
Recall that we want a distribution such that
Pr[a > b] = pop[a] / (pop[a] + pop[b])

We draw without replacement with proba proportional to pop
Pr[a > b > ... > z] = pop[a] / (pop[a]+pop[b]+...+pop[z])
                    * pop[b] / (pop[b]+...+pop[z])
                    * ...
                    * pop[z] / (pop[z])
 <=> sort by increasing X[i] drawn from Exp(pop[i])
 <=> sort by increasing X[i] = -log(Unif)/pop[i]
 <=> sort by increasing Y[i] = log(-log(Unif))-log(pop[i])
"""


def draw_pref(logpop):
    n = len(logpop)
    r = np.log(-np.log(np.random.rand(n)))
    result = sorted(range(n), key=lambda i: r[i] - logpop[i])
    return result


def draw_profile(logpop):
    nbProposers, nbProposees = logpop.shape
    prefP = [draw_pref(logpop[p, :]) for p in range(nbProposers)]
    prefS = [draw_pref(logpop[:, q]) for q in range(nbProposees)]
    return prefP, prefS


def random_instance(n, logpop=None, **params):
    """a 1-based instance dict, see data.py"""
    if logpop is None:
        logpop = generate_logpop(n, **params)
    prefP, prefS = draw_profile(logpop)
    logger.debug("drew preferences of %d proposers and %d proposees", n, n)

    instance = data.empty_instance(n)
    instance["proposer_names"] = ["proposer_{}".format(p + 1) for p in range(n)]
    instance["proposee_names"] = ["proposee_{}".format(q + 1) for q in range(n)]
    instance["proposer_preferences"] = [[q + 1 for q in pr] for pr in prefP]
    instance["proposee_preferences"] = [[p + 1 for p in pr] for pr in prefS]
    return instance


if __name__ == "__main__":
    n = 1000
    filename = "test.txt"
    if len(sys.argv) == 1:
        print("Using defaults: {} pairs and output file {}".format(n, filename))
    elif len(sys.argv) == 3:
        n = int(sys.argv[1])
        filename = sys.argv[2]
        print("Using : {} pairs and output file {}".format(n, filename))
    else:
        print("Usage: {} [n output_filename]".format(sys.argv[0]), file=sys.stderr)
        sys.exit(1)

    print("Drawing preferences...")
    instance = random_instance(n)

    print("Saving instance to file " + filename + "...")
    data.write_instance(instance, filename)

    print("Done.")
