"""Exception hierarchy for the reduction pipeline and motion solver."""


class EphemerisError(Exception):
    """Base class for all failures raised by apparent_ephemeris."""


class UnknownBodyError(EphemerisError, KeyError):
    """Body key or body type tag is not recognized."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ''


class InvalidArgumentError(EphemerisError, ValueError):
    """Malformed direction, unit, motion kind, or out-of-range input."""


class NonConvergenceError(EphemerisError, RuntimeError):
    """An iteration (Kepler equation, station search) exceeded its cap."""
