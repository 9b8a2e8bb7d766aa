"""
Symmetric sparse weight store with adjacency lists.

Implementation: Adjacency List
- Canonical upper-triangular dict storage for the values
- Adjacency sets so the non-zero neighbours of a node are found in
  O(degree) instead of scanning a whole row

Used by HessianTape.reverse_accumulate(sparse=True). Edge-pushing only
ever reads W(i, p) for p <= i, and row/column i is dead once node i has
been pushed, so the store clears it and stays as small as the live
frontier of the sweep instead of growing to (n+1)².
"""

import numpy as np
from typing import Dict, Iterator, List, Optional, Set, Tuple
from collections import defaultdict


class SymmSparseWeights:
    """
    Symmetric sparse matrix W with O(degree) neighbour lookup.

    Two structures:
    1. map: Dict[(i,j), val] - canonical storage (i <= j)
    2. adj: Dict[i, Set[j]]  - all j with W(i,j) != 0

    `add_sym(i, j, v)` and `add_diag(i, v)` follow dense semantics, so the
    pushing/creating stages are written once for both stores.
    """

    def __init__(self, n: int, dtype=np.float64, tol: float = 0.0):
        """
        Args:
            n: matrix dimension
            dtype: dtype of the dense view returned by `to_dense`
            tol: relative cancellation threshold; an entry is dropped when
                 |old + val| <= tol * max(|old|, |val|). The default 0.0
                 drops exact cancellations only, matching the dense store
        """
        self.n = n
        self.dtype = np.dtype(dtype)
        self.tol = tol
        self.map: Dict[Tuple[int, int], complex] = {}
        self.adj: Dict[int, Set[int]] = defaultdict(set)

    def _key(self, i: int, j: int) -> Tuple[int, int]:
        return (i, j) if i <= j else (j, i)

    def _drop(self, key: Tuple[int, int]) -> None:
        i, j = key
        del self.map[key]
        self.adj[i].discard(j)
        self.adj[j].discard(i)
        if not self.adj[i]:
            del self.adj[i]
        if j in self.adj and not self.adj[j]:
            del self.adj[j]

    def add(self, i: int, j: int, val) -> None:
        """
        Add `val` to the symmetric entry {i, j} (stored once).
        Skips zeros; drops the entry if it cancels out.
        """
        if val == 0:
            return

        key = self._key(i, j)
        if key in self.map:
            old = self.map[key]
            self.map[key] = old + val
            if abs(self.map[key]) <= self.tol * max(abs(old), abs(val)):
                self._drop(key)
        else:
            self.map[key] = val
            self.adj[i].add(j)
            if i != j:
                self.adj[j].add(i)

    def add_sym(self, i: int, j: int, val) -> None:
        """W(i,j) += val and W(j,i) += val; doubles onto the diagonal when i == j."""
        self.add(i, j, 2 * val if i == j else val)

    def add_diag(self, i: int, val) -> None:
        """W(i,i) += val."""
        self.add(i, i, val)

    def get(self, i: int, j: int):
        return self.map.get(self._key(i, j), self.dtype.type(0))

    def neighbors(self, i: int) -> List[Tuple[int, complex]]:
        """
        All (p, W(i,p)) with p <= i and W(i,p) != 0.

        KEY OPTIMIZATION: O(degree(i)) instead of O(n).
        """
        if i not in self.adj:
            return []
        return [(p, self.map[self._key(i, p)]) for p in sorted(self.adj[i]) if p <= i]

    def retire(self, i: int) -> None:
        """Node i has been pushed; its row and column are never read again."""
        self.clear_row_col(i)

    def clear_row_col(self, idx: int) -> None:
        if idx not in self.adj:
            return
        for j in list(self.adj[idx]):
            self.map.pop(self._key(idx, j), None)
            if j != idx:
                self.adj[j].discard(idx)
                if not self.adj[j]:
                    del self.adj[j]
        del self.adj[idx]

    def to_dense(self, k: Optional[int] = None) -> np.ndarray:
        """Dense symmetric k x k leading block (default: the whole matrix)."""
        k = self.n if k is None else k
        dense = np.zeros((k, k), dtype=self.dtype)
        for (i, j), val in self.map.items():
            if j < k:
                dense[i, j] = val
                dense[j, i] = val
        return dense

    def items(self) -> Iterator[Tuple[Tuple[int, int], complex]]:
        """Non-zero upper-triangular entries as ((i,j), value)."""
        return iter(self.map.items())

    def nnz(self) -> int:
        """Number of non-zero entries, counting both symmetric halves."""
        return sum(1 if i == j else 2 for (i, j) in self.map)
