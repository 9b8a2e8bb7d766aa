# aad_tape/core/errors.py
"""Exceptions raised by the tapes.

Arithmetic problems (division by zero, log of a negative real, ...) are not
represented here: they surface from numpy as NaN/Inf values or warnings and
are recorded on the tape as-is.
"""


class AutoDiffError(Exception):
    """Base class for errors raised by aad_tape."""


class TapeUsageError(AutoDiffError):
    """The tape was used in a way its recording model does not allow."""


class LogNodesCancelled(AutoDiffError):
    """`log_nodes` stopped early because its cancellation event was set."""
