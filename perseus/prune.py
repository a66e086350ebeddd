"""Dominance pruning of alpha-vector sets

Alpha-vectors are the columns of an S x V matrix; every function returns
the (increasing) column indices that survive, so callers can carry actions
and observation strategies along.
"""

import numpy as np

from perseus.optmodel import WitnessModel


def pointwise_dominated(alp):
    """Only alpha vectors that are point-wise dominated are pruned

    Duplicated columns are kept once (the last copy).
    """
    V = alp.shape[1]
    # lexicographic order puts every dominated column before its dominator
    order = np.lexsort(alp[::-1])
    keepdix = [True] * V
    for i in range(V):
        v = order[i]
        for v1 in order[i + 1:]:
            if np.all(alp[:, v] <= alp[:, v1]):
                keepdix[v] = False
                break
    return np.flatnonzero(keepdix)


def prune(alp, tol=1e-7):
    """Remove alpha vectors not on the upper envelope over the belief simplex

    A column is removed when no belief makes it better than all the other
    remaining columns by more than tol.

    Input:
        alp: S x V numpy array
        tol: witness margin below which a column is considered dominated
    Output:
        increasing array of kept column indices
    """
    keep = list(pointwise_dominated(alp))
    if len(keep) <= 1:
        return np.array(keep, dtype=np.int64)

    lp = WitnessModel(alp.shape[0])
    try:
        for v in list(keep):
            if len(keep) == 1:
                break
            others = [u for u in keep if u != v]
            d, _ = lp.witness(alp[:, v], alp[:, others])
            if d <= tol:
                keep.remove(v)
    finally:
        lp.dispose()
    return np.array(keep, dtype=np.int64)
