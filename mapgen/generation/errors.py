class MapInvariantError(RuntimeError):
    """A finished map broke a structural invariant (e.g. it is no longer connected).

    Signals a generator bug, never bad input: callers must not turn it into a 4xx.
    """

    def __init__(self, message: str, seed: str = None, details=None):
        super().__init__(message)
        self.seed = seed
        self.details = list(details or [])


__all__ = ["MapInvariantError"]
