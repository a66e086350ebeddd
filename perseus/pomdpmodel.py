"""POMDP Model Class
"""

import numpy as np

class POMDP():
    def __init__(self, P, r, discount, b0=None):
        """Initialize POMDP Model
        P: S x A x O x S' numpy array or tuple
           (S x A x S' numpy array, A x S' x O numpy array)
        r: S x A or S x A x O x S' numpy array
        discount: number in [0, 1]
        b0: None or S numpy array

        Creates:
        self.P: S x A x O x S' numpy array, P(s', o|s, a)
        self.r: S x A numpy array
        self.discount: discount factor

        self.b: S numpy array, current belief
        self.bPO: A x O matrix of P(o|self.b, a)
        """
        if isinstance(P, tuple):
            PT, PZ = np.asarray(P[0], dtype=np.float64), np.asarray(P[1], dtype=np.float64)
            if PT.ndim != 3 or PZ.ndim != 3:
                raise ValueError("Transition and observation kernels should be 3 dimensional")
            self.S, self.A, self.O = PT.shape[0], PT.shape[1], PZ.shape[2]
            if PT.shape[2] != self.S or PZ.shape[:2] != (self.A, self.S):
                raise ValueError(
                    "Shapes {0} and {1} do not describe S x A x S' and A x S' x O kernels".format(
                    PT.shape, PZ.shape)
                )
            self.P = np.zeros((self.S, self.A, self.S, self.O))
            for s in range(self.S):
                self.P[s] = PT[s, :, :, np.newaxis] * PZ
                # A x S' x 1 mults A x S' x O so that numpy broadcasting applies
            self.P = np.swapaxes(self.P, 2, 3)
            # switch from S x A x S' x O to S x A x O x S'
        else:
            self.P = np.asarray(P, dtype=np.float64)
            if self.P.ndim != 4 or self.P.shape[3] != self.P.shape[0]:
                raise ValueError(
                    "P should be an S x A x O x S' array, got shape {0}".format(self.P.shape)
                )
            self.S, self.A, self.O = self.P.shape[0], self.P.shape[1], self.P.shape[2]
        self.PO = np.sum(self.P, axis=-1) # S x A x O

        r = np.asarray(r, dtype=np.float64)
        if r.shape == (self.S, self.A):
            self.r = r
        elif r.shape == self.P.shape:
            self.r = np.sum(self.P * r, axis=(2,3)) # convert to expected reward
        else:
            raise ValueError("Dimension of r should be S x A or S x A x O x S'")

        if discount < 0 or discount > 1:
            raise ValueError("Discount factor should be in [0, 1], got {0}".format(discount))
        self.discount = discount
        if b0 is None:
            self.setbelief(1 / self.S * np.ones(self.S))
        else:
            b0 = np.asarray(b0, dtype=np.float64)
            if b0.shape != (self.S,):
                raise ValueError("Initial belief should be an S vector")
            if not np.isclose(np.sum(b0), 1.0):
                raise ValueError("Initial belief should sum up to 1")
            self.setbelief(b0)
        self.b0 = self.b

    @property
    def PT(self):
        return np.sum(self.P, axis=2)

    @property
    def Rmin(self):
        return np.min(self.r)

    @property
    def Rmax(self):
        return np.max(self.r)

    @property
    def Vmin(self):
        """crude lower bound on values, requires discount < 1"""
        return self.Rmin / (1 - self.discount)

    @property
    def Vmax(self):
        """crude upper bound on values, requires discount < 1"""
        return self.Rmax / (1 - self.discount)

    def Pmult(self, v):
        """Compute w(s, a, o) = sum_{s'} P(s', o|s, a) v(s', :)
        Input:
            v: S' x whatever
        Output:
            w: S x A x O x whatever
        """
        return self.P @ v

    def setbelief(self, b):
        self.b = b
        self.br = self.b @ self.r # A vector
        self.bPOS = np.tensordot(self.b, self.P, axes=1) # A x O x S
        self.bPO = np.sum(self.bPOS, axis=-1) # A x O

    def nextbelief(self, a, o):
        if self.bPO[a, o] <= 0:
            return None
        return self.bPOS[a, o, :] / self.bPO[a, o]

    def tao(self, b, a, o):
        """Belief update function
        Input:
            b: S vector
        Output:
            b1: S vector, or None if o cannot be observed after taking a at b
        """
        bo = b @ self.P[:, a, o, :] # S vector, not normalized
        total = np.sum(bo)
        if total <= 0:
            return None

        return bo / total

    def negate(self):
        self.r = -self.r
        self.br = -self.br
