"""
read preferences, check them, run deferred acceptance and print the pairs
"""
import sys
import argparse
import logging

import da
import data
from errors import MatchingError, Outcome

logger = logging.getLogger(__name__)

DEFAULT_INPUT = "test.txt"


def match_instance(instance, record_trace=False):
    # validates before anything is matched, N = 0 included
    store = data.build_store(instance)

    trace = [] if record_trace else None
    matchP, matchS = da.deferred_acceptance(store, trace)
    return Outcome(instance, store, matchP, matchS, trace)


def solve(lines, record_trace=False):
    instance = None
    try:
        instance = data.parse_instance(lines)
        return match_instance(instance, record_trace)
    except MatchingError as e:
        logger.info("no matching: %s", e.diagnostic())
        return Outcome(instance=instance, error=e)


def solve_file(filename, record_trace=False):
    instance = None
    try:
        instance = data.read_instance(filename)
        return match_instance(instance, record_trace)
    except MatchingError as e:
        logger.info("no matching for %s: %s", filename, e.diagnostic())
        return Outcome(instance=instance, error=e)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Stable matching of proposers and proposees by deferred acceptance."
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=DEFAULT_INPUT,
        help="Preference file, '-' for stdin, or a .json instance. Default: "
        + DEFAULT_INPUT,
    )
    parser.add_argument(
        "--report", action="store_true", help="Print statistics on the matching."
    )
    parser.add_argument("--csv", help="Write the matched pairs and their ranks as csv.")
    parser.add_argument(
        "--json", help="Save instance and matching as <JSON>.json and <JSON>.txt."
    )
    parser.add_argument(
        "--plot", help="Draw the rank matrix and the matching into a pdf."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every proposal."
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    outcome = solve_file(args.input, record_trace=args.report)
    if not outcome.ok:
        print(outcome.error.diagnostic(), file=sys.stderr)
        return outcome.exit_code

    # nothing to print for an empty instance
    if not outcome.matchP:
        return 0

    for line in data.render_matching(outcome.instance, outcome.matchP):
        print(line)

    if args.report:
        data.print_result(
            outcome.instance,
            outcome.store,
            outcome.matchP,
            outcome.matchS,
            outcome.trace,
        )
    if args.csv:
        table = data.match_table(outcome.instance, outcome.store, outcome.matchP)
        table.to_csv(args.csv, index=False)
    if args.json:
        data.serialize(outcome.instance, args.json, outcome.matchP)
    if args.plot:
        import simulation
        from matplotlib.backends.backend_pdf import PdfPages

        with PdfPages(args.plot) as pdf:
            simulation.plot_matching(pdf, outcome.store, outcome.matchP, args.input)

    return 0


if __name__ == "__main__":
    sys.exit(main())
