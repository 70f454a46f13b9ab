"""Exception hierarchy for Golfbank."""

from __future__ import annotations


class GolfbankError(Exception):
    """Base class for errors raised by the Golfbank core."""


class ConfigurationError(GolfbankError):
    """A bet or side-bet configuration could not be understood at all."""


class RoundStateError(GolfbankError):
    """An operation is not allowed in the round's current lifecycle state."""


class ScoreEntryError(GolfbankError):
    """A score references an unknown player or a hole outside the course."""
