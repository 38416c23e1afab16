class SolverError(Exception):
    pass


class InvalidProgression(SolverError):
    pass


class NoSolutions(SolverError):
    pass


class UnresolvableKey(SolverError):
    pass


class ScaleDegreeNotFound(SolverError):
    """Raised when the chromatic fallback runs out of half-steps.

    With a diatonic scale this should never happen, so it indicates a
    malformed key rather than a bad progression.
    """
