"""
error kinds raised while reading, validating and matching,
and the outcome returned by the driver
"""

# 2 is left to argparse for usage errors
EXIT_CODES = {
    None: 0,
    "io": 1,
    "parse": 3,
    "validation": 4,
    "internal": 5,
}


class MatchingError(Exception):
    kind = None
    label = "Error"

    def diagnostic(self):
        return "{}: {}".format(self.label, self)


class InputError(MatchingError):
    """the input file could not be opened or read"""

    kind = "io"
    label = "Input error"


class ParseError(MatchingError):
    """missing lines, non-numeric fields"""

    kind = "parse"
    label = "Input data is invalid"

    def __init__(self, message, line=None):
        if line is not None:
            message = "line {}: {}".format(line, message)
        super().__init__(message)
        self.line = line


class ValidationError(MatchingError):
    """preferences are not permutations of 1..N"""

    kind = "validation"
    label = "Preferences are not valid"

    def __init__(self, problems):
        if isinstance(problems, str):
            problems = [problems]
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class InternalError(MatchingError):
    """a broken invariant of the matching loop, never a user error"""

    kind = "internal"
    label = "Internal error"


class Outcome:
    """
    Result of one run of the pipeline.
    Either `error` is set, or `matchP` / `matchS` hold the matching
    (0-based, matchP[p] = proposee of p, matchS[q] = proposer of q).
    """

    def __init__(
        self, instance=None, store=None, matchP=None, matchS=None, trace=None, error=None
    ):
        self.instance = instance
        self.store = store
        self.matchP = matchP
        self.matchS = matchS
        self.trace = trace if trace is not None else []
        self.error = error

    @property
    def ok(self):
        return self.error is None

    @property
    def kind(self):
        return None if self.error is None else self.error.kind

    @property
    def exit_code(self):
        return EXIT_CODES[self.kind]

    def __repr__(self):
        if self.ok:
            return "Outcome(ok, n={})".format(len(self.matchP or []))
        return "Outcome({}, {!r})".format(self.kind, str(self.error))
