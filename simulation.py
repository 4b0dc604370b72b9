import sys as sys
import logging

import numpy as np
import pandas as pd
import matplotlib as mpl
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

import da
import data
import validate
import scenarios as sc
import popularities as pop

logger = logging.getLogger(__name__)


def run_experiment(scenario, nb_experiments=None, logpop=None):
    """one row per random instance drawn for the scenario"""
    name, n, _, _ = scenario
    if nb_experiments is None:
        nb_experiments = sc.nb_experiments
    if logpop is None:
        logpop = pop.generate_logpop(n, **sc.scenario_params(scenario))

    rows = []
    for i in range(nb_experiments):
        instance = pop.random_instance(n, logpop=logpop)
        store = data.build_store(instance)
        trace = []
        matchP, matchS = da.deferred_acceptance(store, trace)

        rows.append(
            {
                "scenario": name,
                "n": n,
                "proposals": len(trace),
                "evictions": len([e for e in trace if e.evicted is not None]),
                "avg_proposer_rank": 1
                + np.average([store.position_of(p, matchP[p]) for p in range(n)]),
                "avg_proposee_rank": 1
                + np.average([store.rank_of(q, matchS[q]) for q in range(n)]),
                "stable": validate.is_stable(store, matchP),
            }
        )
    logger.info("%s: %d experiments with %d pairs", name, nb_experiments, n)
    return pd.DataFrame(rows)


def summarize(results):
    """[min, avg, max] of each measure, per scenario"""
    columns = ["proposals", "evictions", "avg_proposer_rank", "avg_proposee_rank"]
    return results.groupby("scenario", sort=False)[columns].agg(["min", "mean", "max"])


def print_summary(results, file=None):
    file = file or sys.stderr
    for name, df in results.groupby("scenario", sort=False):
        n = df["n"].iloc[0]
        print("\n******\n{} n {} ".format(name, n), file=file)
        print(
            "Statistics on {} experiments [min,avg,max] proposals [{},{},{}] (bound {})".format(
                len(df),
                df["proposals"].min(),
                int(df["proposals"].mean()),
                df["proposals"].max(),
                n * n,
            ),
            file=file,
        )
        print(
            "[min,avg,max] average rank of proposers [{:.2f},{:.2f},{:.2f}] of proposees [{:.2f},{:.2f},{:.2f}]".format(
                df["avg_proposer_rank"].min(),
                df["avg_proposer_rank"].mean(),
                df["avg_proposer_rank"].max(),
                df["avg_proposee_rank"].min(),
                df["avg_proposee_rank"].mean(),
                df["avg_proposee_rank"].max(),
            ),
            file=file,
        )
        if not df["stable"].all():
            print("Unstable matchings: {}".format((~df["stable"]).sum()), file=file)


def plot_matching(pdf, store, matchP, title, values=None):
    """heatmap of values (default: proposer ranks), matched pairs in red"""
    n = store.n
    if values is None:
        values = store.rankP + 1
    cmap = mpl.colormaps["viridis"]
    norm = mpl.colors.Normalize(vmin=np.min(values), vmax=np.max(values))

    plt.figure(figsize=(6, 5), tight_layout=True)
    plt.title(title)

    plt.imshow(values, origin="lower", norm=norm, cmap=cmap)
    plt.xlabel("proposees")
    plt.ylabel("proposers")
    plt.colorbar()

    for p in range(n):
        plt.plot([matchP[p]], [p], "r.", markersize=3)

    plt.xlim((-0.5, n - 0.5))
    plt.ylim((-0.5, n - 0.5))

    pdf.savefig()
    plt.close()


def plot_proposals(pdf, results, title):
    n = results["n"].iloc[0]
    plt.figure(figsize=(10, 3), tight_layout=True)

    ax = plt.subplot(1, 2, 1)
    ax.title.set_text(title)
    plt.hist(results["proposals"], bins=20)
    plt.axvline(n * n, color="r", label="n²")
    plt.xlabel("proposals")
    plt.legend()

    ax = plt.subplot(1, 2, 2)
    ax.title.set_text("average rank of the match")
    plt.hist(results["avg_proposer_rank"], bins=20, alpha=0.6, label="proposers")
    plt.hist(results["avg_proposee_rank"], bins=20, alpha=0.6, label="proposees")
    plt.xlabel("rank")
    plt.legend()

    pdf.savefig()
    plt.close()


def simulate(filename, scenario_list=None, nb_experiments=None):
    if scenario_list is None:
        scenario_list = sc.scenarios

    all_results = []
    with PdfPages(filename) as pdf:
        for scenario in scenario_list:
            name, n, _, _ = scenario
            logpop = pop.generate_logpop(n, **sc.scenario_params(scenario))
            results = run_experiment(scenario, nb_experiments, logpop=logpop)
            all_results.append(results)

            # one sample matching over the popularity profile
            store = data.build_store(pop.random_instance(n, logpop=logpop))
            matchP, _ = da.deferred_acceptance(store)
            plot_matching(pdf, store, matchP, name, values=logpop)
            plot_proposals(pdf, results, name)

    return pd.concat(all_results, ignore_index=True)


if __name__ == "__main__":
    filename = "fig.pdf"
    if len(sys.argv) == 2:
        filename = sys.argv[1]
    elif len(sys.argv) > 2:
        print("Usage: {} [figure_filename] ".format(sys.argv[0]), file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    results = simulate(filename)
    print_summary(results)
