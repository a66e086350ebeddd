"""PERSEUS: randomized point-based value iteration (Spaan and Vlassis 2005)

PERSEUS only looks for as few alpha-vectors as needed to improve the value
of every belief in a fixed sampled set. Most beliefs get improved by an
alpha-vector found for another belief, so most backups are skipped. The
resulting value functions can be very approximate, but each iteration is
cheap, so many more of them can be afforded than with e.g. PBVI.
"""

import numpy as np
from numpy.random import default_rng
import time

from perseus.beliefgen import BeliefGenerator
from perseus.projecter import Projecter
from perseus.prune import prune
from perseus.vfun import VList, initialvlist, weak_bound_distance


class PERSEUS():
    def __init__(self, nbeliefs, horizon, epsilon, seed=None, verbose=True):
        """
        nbeliefs: number of support beliefs
        horizon: maximum number of backup iterations
        epsilon: stop once the weak bound distance between two successive
            VLists is at most epsilon; 0.0 always runs horizon iterations
        seed: seed of the random generator used to sample beliefs
        """
        self.setBeliefSize(nbeliefs)
        self.setHorizon(horizon)
        self.setEpsilon(epsilon)
        self.rng = default_rng(seed)
        self.verbose = verbose
        self.t0 = time.time()
        self.beliefs = None
        self.resetstats()

    def setEpsilon(self, epsilon):
        if epsilon < 0.0:
            raise ValueError("Epsilon must be >= 0, got {0}".format(epsilon))
        self.epsilon = epsilon

    def setHorizon(self, horizon):
        if horizon < 0 or horizon != int(horizon):
            raise ValueError("Horizon must be an integer >= 0, got {0}".format(horizon))
        self.horizon = int(horizon)

    def setBeliefSize(self, nbeliefs):
        if nbeliefs < 0 or nbeliefs != int(nbeliefs):
            raise ValueError("Number of beliefs must be an integer >= 0, got {0}".format(nbeliefs))
        self.nbeliefs = int(nbeliefs)

    def getEpsilon(self):
        return self.epsilon

    def getHorizon(self):
        return self.horizon

    def getBeliefSize(self):
        return self.nbeliefs

    def resetstats(self):
        self.backupcounts = []
        self.skipcounts = []
        self.carrycounts = []
        self.variations = []
        self.timeprojection = 0.0
        self.timebackup = 0.0
        self.timeprune = 0.0

    def Solve(self, M, minreward=None):
        """Solve a POMDP model approximately

        Input:
            M: a pomdp model with fields S, A, O, discount, r and methods
               Pmult, setbelief, nextbelief (see perseus.pomdpmodel.POMDP)
            minreward: smallest reward of the model, defaults to min(M.r)
        Output:
            (variation, V): V is the list of VLists, V[0] being the initial
            lower bound; variation is the last weak bound distance if
            epsilon > 0, otherwise 0.0
        """
        if M.discount >= 1:
            raise ValueError("The model cannot have a discount of 1 in PERSEUS")
        if minreward is None:
            minreward = M.Rmin
        self.t0 = time.time()
        self.resetstats()
        self.S, self.A, self.O = M.S, M.A, M.O

        # all beliefs are sampled once and reused in every timestep
        self.beliefs = BeliefGenerator(M, self.rng)(self.nbeliefs)

        # start from the worst case scenario
        V = [initialvlist(self.S, minreward / (1 - M.discount))]

        if self.nbeliefs == 0:
            self._print("No beliefs to improve, returning the initial bound")
            return 0.0, V

        projecter = Projecter(M)
        useepsilon = self.epsilon > 0
        variation = np.inf
        timestep = 0
        while timestep < self.horizon and (not useepsilon or variation > self.epsilon):
            try:
                tp0 = time.time()
                projs = projecter(V[timestep])
                self.timeprojection += time.time() - tp0
                V.append(self.crossSum(projs, self.beliefs, V[timestep]))
            except KeyboardInterrupt:
                self._print("User KeyboardInterrupt. Terminating Algorithm")
                break
            timestep += 1

            if useepsilon:
                variation = weak_bound_distance(V[timestep-1], V[timestep])
                self.variations.append(variation)
                self._print(
                    "Timestep {0}: {1} alpha vectors, {2} backups, {3} skipped, variation: {4:.6f}".format(
                    timestep, len(V[timestep]), self.backupcounts[-1],
                    self.skipcounts[-1], variation)
                )
            else:
                self._print(
                    "Timestep {0}: {1} alpha vectors, {2} backups, {3} skipped".format(
                    timestep, len(V[timestep]), self.backupcounts[-1],
                    self.skipcounts[-1])
                )

        if self.verbose:
            self.printstats()
        return (variation if useepsilon and timestep > 0 else 0.0), V

    def crossSum(self, projs, beliefs, oldV):
        """Find a small VList improving every belief with respect to oldV

        For each belief, check whether an alpha-vector found so far already
        improves it. If not, build the best alpha-vector for it by picking
        the best projection for each observation, and keep the best action.
        Finally prune the dominated alpha-vectors.

        Input:
            projs: S x A x O x V projections of oldV (see Projecter)
            beliefs: N x S numpy array
            oldV: VList of the previous timestep
        Output:
            VList
        """
        S, A, O = projs.shape[:3]
        N = len(beliefs)
        alp = np.zeros((S, N))
        actions = np.zeros(N, dtype=np.int64)
        obs = np.zeros((N, O), dtype=np.int64)
        count, numbackups, numskipped, numcarried = 0, 0, 0, 0

        tb0 = time.time()
        for b in beliefs:
            _, oldvalue = oldV.bestatbelief(b)
            if count > 0:
                # already improved by one of the alpha-vectors found so far
                if np.max(b @ alp[:, :count]) >= oldvalue:
                    numskipped += 1
                    continue

            newalp, astar, alpidx = self.backup(projs, b)
            numbackups += 1
            if b @ newalp >= oldvalue:
                alp[:, count] = newalp
                actions[count] = astar
                obs[count] = alpidx
            else:
                # the backup is worse than oldV here, keep the old
                # alpha-vector; its observation strategy is not available
                oldidx, _ = oldV.bestatbelief(b)
                alp[:, count] = oldV.alp[:, oldidx]
                actions[count] = oldV.actions[oldidx]
                obs[count] = -1
                numcarried += 1
            count += 1
        self.timebackup += time.time() - tb0

        tp0 = time.time()
        keep = prune(alp[:, :count])
        self.timeprune += time.time() - tp0

        self.backupcounts.append(numbackups)
        self.skipcounts.append(numskipped)
        self.carrycounts.append(numcarried)
        return VList(alp[:, keep], actions[keep], obs[keep])

    def backup(self, projs, b):
        """Point-based backup at belief b

        Ties are broken in favor of the first maximal projection and the
        first maximal action.
        Output:
            (newalp, astar, alpidx): S vector, action, O vector of indices
            of the chosen alpha-vectors of the previous timestep
        """
        S, A, O = projs.shape[:3]
        bTalphaao = np.tensordot(b, projs, axes=1) # A x O x V
        alpidx = np.argmax(bTalphaao, axis=-1) # A x O indices in range(V)
        Vb1 = np.zeros((S, A))
        for a in range(A):
            Vb1[:, a] = np.sum(projs[:, a, np.arange(O), alpidx[a]], axis=-1)
        astar = int(np.argmax(b @ Vb1))
        return Vb1[:, astar], astar, alpidx[astar]

    def printstats(self):
        t1 = time.time()
        print("Iterations: {0}".format(len(self.backupcounts)))
        print("Total backups: {0}, skipped beliefs: {1}".format(
            sum(self.backupcounts), sum(self.skipcounts)))
        print("Algorithm Time: {0:.3f}s".format(t1 - self.t0))
        print("Time spent on Projection: {0:.3f}s".format(self.timeprojection))
        print("Time spent on Backup: {0:.3f}s".format(self.timebackup))
        print("Time spent on Pruning: {0:.3f}s".format(self.timeprune))

    def _print(self, msg):
        if self.verbose:
            print("[{0:.3f}s] {1}".format(time.time() - self.t0, msg))


def PerseusValueIteration(M, nbeliefs, horizon, epsilon=0.0, minreward=None,
                          seed=None, verbose=True):
    """PERSEUS Algorithm

    Input:
        M, a pomdp model that should have the following fields:
            M.S: number of states
            M.A: number of actions
            M.O: number of observations
            M.discount: discount factor, must be < 1
            M.r: S x A rewards
        it should also implement the following methods:
            M.Pmult(v)
            M.setbelief(b)
            M.nextbelief(a, o)

        nbeliefs: number of sampled beliefs
        horizon: maximum number of iterations
        epsilon: convergence threshold (0.0 runs all horizon iterations)
        minreward: smallest reward, defaults to min(M.r)
        seed: seed for belief sampling
    Output:
        (variation, V)
    """
    Solver = PERSEUS(nbeliefs, horizon, epsilon, seed=seed, verbose=verbose)
    return Solver.Solve(M, minreward)
