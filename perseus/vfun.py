"""Value function containers

A VList stores its alpha-vectors as the columns of an S x V matrix, with
the action and the observation strategy of every column kept alongside.
A value function is a plain list of VLists, index 0 being the initial
bound.
"""

import collections
import numpy as np


VEntry = collections.namedtuple("VEntry", ["values", "action", "obs"])


class VList():
    """One timestep of a value function

    Properties:
    alp: S x V numpy array, column alpha-vectors
    actions: V integer array, action of every alpha-vector
    obs: V x O integer array, obs[v, o] is the index of the alpha-vector of
        the previous timestep followed after observing o (O = 0 for the
        initial bound)
    """
    def __init__(self, alp, actions, obs):
        self.alp = np.asarray(alp, dtype=np.float64)
        self.actions = np.asarray(actions, dtype=np.int64)
        self.obs = np.asarray(obs, dtype=np.int64)
        assert(self.alp.ndim == 2)
        assert(self.actions.shape == (self.alp.shape[1],))
        assert(self.obs.ndim == 2 and self.obs.shape[0] == self.alp.shape[1])

    @classmethod
    def fromentries(cls, entries, S, O):
        if len(entries) == 0:
            return cls(np.zeros((S, 0)), np.zeros(0), np.zeros((0, O)))
        return cls(
            np.column_stack([e.values for e in entries]),
            [e.action for e in entries],
            np.vstack([np.reshape(e.obs, (1, -1)) for e in entries])
        )

    @property
    def S(self):
        return self.alp.shape[0]

    def __len__(self):
        return self.alp.shape[1]

    def __getitem__(self, v):
        return VEntry(self.alp[:, v], int(self.actions[v]), self.obs[v])

    def __iter__(self):
        for v in range(len(self)):
            yield self[v]

    def values(self, b):
        """b @ alpha for every alpha-vector"""
        return b @ self.alp

    def bestatbelief(self, b):
        """Index and value of the best alpha-vector at belief b

        Ties go to the first maximal alpha-vector.
        """
        if len(self) == 0:
            raise ValueError("Cannot evaluate an empty VList")
        vals = self.values(b)
        idx = int(np.argmax(vals))
        return idx, vals[idx]

    def value(self, b):
        return self.bestatbelief(b)[1]

    def subset(self, idx):
        return VList(self.alp[:, idx], self.actions[idx], self.obs[idx])


def initialvlist(S, value):
    """VList with a single constant alpha-vector and no observation strategy"""
    return VList(np.full((S, 1), value), [0], np.zeros((1, 0)))


def weak_bound_distance(oldV, newV):
    """Cheap bound on the difference between two VLists

    For every new alpha-vector take the smallest max-norm distance to an
    old alpha-vector, and return the largest of those. Avoids the LPs a
    strong bound would need.
    Input:
        oldV, newV: VList
    """
    if len(oldV) == 0 or len(newV) == 0:
        return 0.0
    diff = np.abs(newV.alp[:, :, np.newaxis] - oldV.alp[:, np.newaxis, :])
    # diff is S x Vnew x Vold
    errorbound = np.min(np.max(diff, axis=0), axis=1) # Vnew
    return max(0.0, float(np.max(errorbound)))


def bestaction(V, b):
    """Greedy action and value at belief b according to the last VList of
    the value function V
    """
    idx, vb = V[-1].bestatbelief(b)
    return int(V[-1].actions[idx]), vb
