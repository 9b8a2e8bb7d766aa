"""
Dense symmetric weight matrix for edge-pushing.

The default store: one zeroed (n, n) numpy buffer, O(n²) memory, sized to
the starting node of the sweep. Stale entries in rows already pushed are
never cleared; `neighbors` only looks at columns p <= i so they are ignored.
"""

import numpy as np
from typing import List, Optional, Tuple


class DenseWeights:
    """Same interface as SymmSparseWeights, backed by a full matrix."""

    def __init__(self, n: int, dtype=np.float64):
        self.n = n
        self.W = np.zeros((n, n), dtype=dtype)

    def add_sym(self, i: int, j: int, val) -> None:
        """W(i,j) += val and W(j,i) += val."""
        self.W[i, j] += val
        self.W[j, i] += val

    def add_diag(self, i: int, val) -> None:
        self.W[i, i] += val

    def get(self, i: int, j: int):
        return self.W[i, j]

    def neighbors(self, i: int) -> List[Tuple[int, complex]]:
        """All (p, W(i,p)) with p <= i and W(i,p) != 0."""
        row = self.W[i, :i + 1]
        return [(p, row[p]) for p in np.flatnonzero(row)]

    def retire(self, i: int) -> None:
        pass

    def to_dense(self, k: Optional[int] = None) -> np.ndarray:
        k = self.n if k is None else k
        return self.W[:k, :k].copy()

    def nnz(self) -> int:
        return int(np.count_nonzero(self.W))
