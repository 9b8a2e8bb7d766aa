"""
Hessian accumulation by edge-pushing.
From "A new framework for the computation of Hessians" (Gower & Mello).

Weight stores:
- DenseWeights: full (n, n) numpy buffer, the default
- SymmSparseWeights: adjacency-list symmetric sparse matrix, opt-in

Stages:
- pushing_stage / creating_stage: per-node steps of the reverse sweep
"""

from .dense_weights import DenseWeights
from .symm_sparse_adjlist import SymmSparseWeights
from .pushing import pushing_stage, creating_stage

__all__ = [
    'DenseWeights',
    'SymmSparseWeights',
    'pushing_stage',
    'creating_stage',
]
