"""Exception hierarchy for the point engine."""


class PointEngineError(Exception):
    """Base class for errors raised by the engine itself."""
