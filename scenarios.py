"""
experiment configuration

In each scenario we draw nb_experiments instances of n pairs:
- alpha_proposers: how strongly proposees agree on the popular proposers
- alpha_proposees: how strongly proposers agree on the popular proposees
alpha = 0 gives uniform random preferences
"""

nb_experiments = 200

scenarios = [
    ("Uniform", 50, 0, 0),
    ("Popular proposees", 50, 0, 2),
    ("Popular proposers", 50, 1, 0),
    ("Both sides agree", 50, 1, 2),
]

# popularity shared by a fraction of pairs
params = {
    "percent": 0.05,
    "factor": 10,
}


def scenario_params(scenario):
    name, n, alpha_proposers, alpha_proposees = scenario
    return dict(params, alpha_proposers=alpha_proposers, alpha_proposees=alpha_proposees)


def find(name):
    for scenario in scenarios:
        if scenario[0] == name:
            return scenario
    raise KeyError("unknown scenario {!r}".format(name))
