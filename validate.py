"""
checks on preference lists before matching,
and on a matching once it has been computed
"""
import sys
import logging

from errors import MatchingError, ValidationError

logger = logging.getLogger(__name__)


def permutation_problems(values, n, base=1):
    """problems that prevent `values` from being a permutation of base..base+n-1"""
    if values is None:
        return ["preferences can not be empty"]
    values = list(values)
    if len(values) != n:
        return ["has {} preferences, expected {}".format(len(values), n)]

    problems = []
    seen = set()
    for v in values:
        if not base <= v < base + n:
            problems.append(
                "preference {} is not between {} and {}".format(v, base, base + n - 1)
            )
        elif v in seen:
            problems.append("preference {} is repeated".format(v))
        seen.add(v)
    return problems


def validate(proposer_preferences, proposee_preferences, n, base=1):
    problems = []
    if proposer_preferences is None or proposee_preferences is None:
        return ["preferences can not be null or empty"]

    if len(proposer_preferences) != n:
        problems.append(
            "{} proposers do not match the number of matches {}".format(
                len(proposer_preferences), n
            )
        )
    if len(proposee_preferences) != n:
        problems.append(
            "{} proposees do not match the number of matches {}".format(
                len(proposee_preferences), n
            )
        )

    for side, lists in (
        ("proposer", proposer_preferences),
        ("proposee", proposee_preferences),
    ):
        for i, pr in enumerate(lists):
            for problem in permutation_problems(pr, n, base):
                # report ids the way the caller numbers them
                problems.append("{} {}: {}".format(side, i + base, problem))

    return problems


def ensure_valid(proposer_preferences, proposee_preferences, n, base=1):
    problems = validate(proposer_preferences, proposee_preferences, n, base)
    if problems:
        for problem in problems:
            logger.debug("invalid preferences: %s", problem)
        raise ValidationError(problems)


def check_bijection(matchP, matchS):
    problems = []
    if len(matchP) != len(matchS):
        return ["{} proposers but {} proposees".format(len(matchP), len(matchS))]
    for p, q in enumerate(matchP):
        if q is None:
            problems.append("proposer {} is unmatched".format(p))
        elif matchS[q] != p:
            problems.append(
                "proposer {} matched to {} but proposee {} matched to {}".format(
                    p, q, q, matchS[q]
                )
            )
    for q, p in enumerate(matchS):
        if p is None:
            problems.append("proposee {} is unmatched".format(q))
    return problems


def blocking_pairs(store, matchP):
    """
    pairs (p, q) that both prefer each other to their partners,
    matchP is a complete 0-based proposer -> proposee mapping
    """
    matchS = [None] * store.n
    for p, q in enumerate(matchP):
        matchS[q] = p

    result = []
    for p in range(store.n):
        partner = matchP[p]
        # only proposees p ranks above its partner can block
        for q in store.preference_of(p)[: store.position_of(p, partner)]:
            q = int(q)
            if store.prefers(q, p, matchS[q]):
                result.append((p, q))
    return result


def is_stable(store, matchP):
    return not blocking_pairs(store, matchP)


def verify(instance, lines):
    """problems of a rendered matching against its instance"""
    import data

    store = data.build_store(instance)
    matchP = data.parse_matching(lines, instance)
    matchS = [None] * store.n
    problems = []
    for p, q in enumerate(matchP):
        if matchS[q] is not None:
            problems.append(
                "Two proposers with same proposee ({}): {} and {}".format(
                    instance["proposee_names"][q],
                    instance["proposer_names"][matchS[q]],
                    instance["proposer_names"][p],
                )
            )
        else:
            matchS[q] = p
    if problems:
        return problems

    for p, q in blocking_pairs(store, matchP):
        problems.append(
            "Blocking pair found: ({}, {}) over ({}, {}) and ({}, {})".format(
                instance["proposer_names"][p],
                instance["proposee_names"][q],
                instance["proposer_names"][p],
                instance["proposee_names"][matchP[p]],
                instance["proposee_names"][q],
                instance["proposer_names"][matchS[q]],
            )
        )
    return problems


if __name__ == "__main__":
    import data

    if len(sys.argv) != 3:
        print("Incorrect Usage: python validate.py <instance> <output>")
        sys.exit(1)

    input_file = sys.argv[1]
    output_file = sys.argv[2]

    try:
        instance = data.read_instance(input_file)
        with open(output_file, "r") as f:
            problems = verify(instance, f.read().splitlines())
    except OSError as e:
        print("Input error: {}".format(e), file=sys.stderr)
        sys.exit(1)
    except MatchingError as e:
        print(e.diagnostic(), file=sys.stderr)
        sys.exit(1)

    for problem in problems:
        print(problem)
    if problems:
        sys.exit(1)
    print("No blocking pair found, correct!")
