"""Belief point sampling
"""

import numpy as np
from numpy.random import default_rng


class BeliefGenerator():
    """Samples belief points trying to cover the reachable belief simplex

    The corners of the simplex come first. The set is then grown by
    simulation: from every belief already in the set, a random action is
    taken, an observation is drawn from P(o|b, a) and the updated belief
    becomes a candidate; the candidate farthest (L1) from the set is kept.
    If an expansion round finds nothing new, the remaining beliefs are drawn
    uniformly from the simplex.
    """
    def __init__(self, M, rng=None):
        self.M = M
        self.rng = default_rng() if rng is None else rng

    def __call__(self, n):
        return self.generate(n)

    def generate(self, n):
        """Output:
            n x S numpy array, row vectors are beliefs
        """
        S = self.M.S
        beliefs = np.zeros((n, S))
        k = min(n, S)
        beliefs[:k, :] = np.eye(S)[:k]

        while k < n:
            added = self.expand(beliefs, k, n)
            if added == 0:
                beliefs[k:] = self.rng.dirichlet(np.ones(S), size=n - k)
                break
            k += added
        return beliefs

    def expand(self, beliefs, k, n):
        """Stochastic simulation with exploratory action

        Writes new beliefs in rows k, k+1, ... of beliefs (at most n - k of
        them) and returns how many were added.
        """
        added = 0
        for i in range(k):
            if k + added >= n:
                break
            current = beliefs[:k + added]
            best, bestdist = None, 0.0
            for a in self.rng.permutation(self.M.A):
                b1 = self.simulate(beliefs[i], a)
                if b1 is None:
                    continue
                dist = np.min(np.sum(np.abs(current - b1), axis=1))
                if dist > bestdist + 1e-9:
                    best, bestdist = b1, dist
            if best is not None:
                beliefs[k + added] = best
                added += 1
        return added

    def simulate(self, b, a):
        self.M.setbelief(b)
        po = self.M.bPO[a]
        total = np.sum(po)
        if total <= 0:
            return None
        o = self.rng.choice(self.M.O, p=po / total)
        return self.M.nextbelief(a, o)
