# aad_tape/core/var.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Variable:
    """
    Handle to a value recorded on a tape.

    Attributes
    ----------
    index : int
        Arena slot of the node that produced `value`. Variables returned while
        a tape is not tracking carry the next unused slot instead.
    value : Any
        Primal (forward) value, in the tape's numeric representation.

    Variables are inert: all differentiation happens through the tape that
    created them, so the same tape must be passed to every operation.
    """
    index: int
    value: Any

    def __repr__(self):
        return f"Variable({self.index}, {self.value!r})"

    def __str__(self):
        return str(self.value)
