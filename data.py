"""
read and write preference instances, render and report matchings

An instance is a dict:
  nb_matches            N
  proposer_names        N names
  proposer_preferences  N lists of proposee indices, 1..N, favourite first
  proposee_names        N names
  proposee_preferences  N lists of proposer indices, 1..N, favourite first

Indices are 1-based in files and in the instance dict, 0-based once
the instance is turned into a PreferenceStore.
"""
import re
import sys
import json
import logging

import numpy as np
import pandas as pd

import validate
from errors import InputError, ParseError
from preferences import PreferenceStore

logger = logging.getLogger(__name__)

# plain ascii integers, negative ones are left for the validator
NUMBER = re.compile(r"-?[0-9]+")

INSTANCE_KEYS = (
    "nb_matches",
    "proposer_names",
    "proposer_preferences",
    "proposee_names",
    "proposee_preferences",
)


def empty_instance(n=0):
    return {
        "nb_matches": n,
        "proposer_names": [],
        "proposer_preferences": [],
        "proposee_names": [],
        "proposee_preferences": [],
    }


def to_preferences(line, number, what):
    tokens = line.split()
    if not tokens:
        raise ParseError("no preferences for {}".format(what), line=number)
    result = []
    for token in tokens:
        if not NUMBER.fullmatch(token):
            raise ParseError(
                "preferences of {} are not in number format: {!r}".format(what, token),
                line=number,
            )
        result.append(int(token))
    return result


def parse_instance(lines):
    if isinstance(lines, str):
        lines = lines.splitlines()
    lines = [line.rstrip("\r\n") for line in lines]
    pos = 0

    def next_line(what):
        nonlocal pos
        if pos >= len(lines):
            raise ParseError("missing {}".format(what), line=pos + 1)
        pos += 1
        return lines[pos - 1]

    header = next_line("number of matches").strip()
    if not NUMBER.fullmatch(header):
        raise ParseError("number of matches is not a number: {!r}".format(header), line=1)
    n = int(header)
    if n < 0:
        raise ParseError("number of matches can not be negative: {}".format(n), line=1)

    instance = empty_instance(n)
    if n == 0:
        return instance

    for side in ("proposer", "proposee"):
        for i in range(1, n + 1):
            instance[side + "_names"].append(
                next_line("name of {} {}".format(side, i)).strip()
            )
        for i in range(1, n + 1):
            what = "{} {}".format(side, i)
            line = next_line("preferences of " + what)
            instance[side + "_preferences"].append(to_preferences(line, pos, what))

    if pos < len(lines) and any(line.strip() for line in lines[pos:]):
        logger.warning("ignoring %d trailing lines", len(lines) - pos)

    logger.info("read %d proposers and %d proposees", n, n)
    return instance


def check_instance(instance):
    """structural checks for instances not read from the line format"""
    if not isinstance(instance, dict):
        raise ParseError("instance is not a dictionary")
    for key in INSTANCE_KEYS:
        if key not in instance:
            raise ParseError("missing {}".format(key))
    n = instance["nb_matches"]
    if not isinstance(n, int) or n < 0:
        raise ParseError("number of matches is not a natural number: {!r}".format(n))
    for side in ("proposer", "proposee"):
        names = instance[side + "_names"]
        prefs = instance[side + "_preferences"]
        if not isinstance(names, list) or not all(isinstance(v, str) for v in names):
            raise ParseError("{} names are not a list of names".format(side))
        if not isinstance(prefs, list):
            raise ParseError("{} preferences are not a list".format(side))
        if len(names) != len(prefs):
            raise ParseError(
                "{} {} names for {} preference lists".format(len(names), side, len(prefs))
            )
        for i, pr in enumerate(prefs):
            if not isinstance(pr, list) or not all(
                isinstance(v, int) and not isinstance(v, bool) for v in pr
            ):
                raise ParseError(
                    "preferences of {} {} are not in number format".format(side, i + 1)
                )
    return instance


def read_instance(filename):
    if filename == "-":
        return parse_instance(sys.stdin.read())
    if filename.endswith(".json"):
        return deserialize(filename[: -len(".json")])
    try:
        with open(filename, "r") as f:
            text = f.read()
    except FileNotFoundError:
        raise InputError("{} file not found".format(filename))
    except (OSError, UnicodeDecodeError) as e:
        raise InputError("can not read {}: {}".format(filename, e))
    logger.info("reading %s", filename)
    return parse_instance(text)


def build_store(instance):
    n = instance["nb_matches"]
    validate.ensure_valid(
        instance["proposer_preferences"], instance["proposee_preferences"], n
    )
    prefP = [[q - 1 for q in pr] for pr in instance["proposer_preferences"]]
    prefS = [[p - 1 for p in pr] for pr in instance["proposee_preferences"]]
    return PreferenceStore(prefP, prefS)


def render_matching(instance, matchP):
    # iterate by proposer over proposer -> proposee, never over matchS
    proposers = instance["proposer_names"]
    proposees = instance["proposee_names"]
    return ["{} / {}".format(proposers[p], proposees[q]) for p, q in enumerate(matchP)]


def parse_matching(lines, instance):
    """matchP from rendered lines, one per proposer in order"""
    if isinstance(lines, str):
        lines = lines.splitlines()
    lines = [line.rstrip("\r\n") for line in lines if line.strip()]
    proposers = instance["proposer_names"]
    proposees = instance["proposee_names"]
    if len(lines) != len(proposers):
        raise ParseError(
            "{} matches for {} proposers".format(len(lines), len(proposers))
        )

    matchP = []
    for i, (name, line) in enumerate(zip(proposers, lines)):
        prefix = name + " / "
        if not line.startswith(prefix):
            raise ParseError("expected a match for {}".format(name), line=i + 1)
        proposee = line[len(prefix) :]
        if proposee not in proposees:
            raise ParseError("unknown proposee {!r}".format(proposee), line=i + 1)
        matchP.append(proposees.index(proposee))
    return matchP


def format_instance(instance):
    lines = [str(instance["nb_matches"])]
    for side in ("proposer", "proposee"):
        lines += instance[side + "_names"]
        lines += [" ".join(map(str, pr)) for pr in instance[side + "_preferences"]]
    return "\n".join(lines) + "\n"


def write_instance(instance, filename):
    with open(filename, "w") as f:
        f.write(format_instance(instance))


"""save instance as text and json, with the matching if there is one"""


def serialize(instance, filename, matchP=None):
    with open(filename + ".txt", "w") as f:
        f.write(format_instance(instance))

    model = {key: instance[key] for key in INSTANCE_KEYS}
    if matchP is not None:
        model["matching"] = [q + 1 for q in matchP]
    with open(filename + ".json", "w") as f:
        json.dump(model, f, indent=1)


def deserialize(filename):
    try:
        with open(filename + ".json", "r") as f:
            instance = json.load(f)
    except FileNotFoundError:
        raise InputError("{}.json file not found".format(filename))
    except OSError as e:
        raise InputError("can not read {}.json: {}".format(filename, e))
    except ValueError as e:
        raise ParseError("{}.json is not valid json: {}".format(filename, e))
    return check_instance(instance)


def match_table(instance, store, matchP):
    rows = []
    for p, q in enumerate(matchP):
        rows.append(
            {
                "proposer": instance["proposer_names"][p],
                "proposee": instance["proposee_names"][q],
                "proposer_rank": store.position_of(p, q) + 1,
                "proposee_rank": store.rank_of(q, p) + 1,
            }
        )
    return pd.DataFrame(
        rows, columns=["proposer", "proposee", "proposer_rank", "proposee_rank"]
    )


def print_result(instance, store, matchP, matchS, trace, file=None):
    file = file or sys.stdout
    n = store.n
    if n == 0:
        return

    rank_pref_match = [store.position_of(p, matchP[p]) for p in range(n)]
    rank_pref_match_s = [store.rank_of(q, matchS[q]) for q in range(n)]

    matched_to_favourite = rank_pref_match.count(0)
    matched_to_favourites = len([r for r in rank_pref_match if r <= 2])
    avg_match_rank = 1 + np.average(rank_pref_match)

    matched_to_favourite_s = rank_pref_match_s.count(0)
    matched_to_favourites_s = len([r for r in rank_pref_match_s if r <= 2])
    avg_match_rank_s = 1 + np.average(rank_pref_match_s)

    print("\n****************************************************************", file=file)
    print("Deferred acceptance, proposers propose", file=file)
    print(
        "\t{} proposals for {} pairs (at most {}).".format(len(trace), n, n * n),
        file=file,
    )
    print(
        "\tRejected proposals {}, broken engagements {}.".format(
            len([e for e in trace if not e.accepted]),
            len([e for e in trace if e.evicted is not None]),
        ),
        file=file,
    )
    print("\n", file=file)
    print("Proposers", file=file)
    print("\tMatched to their favourite {}.".format(matched_to_favourite), file=file)
    print(
        "\tMatched to one of their three favourites {}.".format(matched_to_favourites),
        file=file,
    )
    print("\tAverage rank of the match {:.2f}.".format(avg_match_rank), file=file)
    print("\n", file=file)
    print("Proposees", file=file)
    print("\tMatched to their favourite {}.".format(matched_to_favourite_s), file=file)
    print(
        "\tMatched to one of their three favourites {}.".format(matched_to_favourites_s),
        file=file,
    )
    print("\tAverage rank of the match {:.2f}.".format(avg_match_rank_s), file=file)
