"""Optimization Models

All calls to Gurobi optimization studio is wrapped in the classes defined in this
file. To replace Gurobi with something else, only the classes in this file needs
to be reimplemented, no other files need to change.

"""
import numpy as np
import gurobipy as grb

class OptimizationError(Exception):
    """Raised when gurobi got some internal error that cause the
    optimization process to fail
    """
    pass

class OptimizationModel():
    """A generic gurobi model wrapper with constraint management
    """
    def __init__(self, name):
        self.grbmodel = grb.Model(name)
        self.grbmodel.setParam("OutputFlag", 0)
        self.grbmodel.setAttr("ModelSense", grb.GRB.MAXIMIZE)

    def solve(self, expr):
        self.grbmodel.setObjective(expr)
        self.grbmodel.optimize()
        if self.grbmodel.Status == grb.GRB.OPTIMAL:
            return self.grbmodel.ObjVal
        elif self.grbmodel.Status == grb.GRB.INTERRUPTED: # user interrupt
            raise KeyboardInterrupt
        else:
            raise OptimizationError(
                "{0} LP status: {1}".format(self.grbmodel.ModelName, self.grbmodel.Status)
            )

    def dispose(self):
        self.grbmodel.dispose()


class WitnessModel(OptimizationModel):
    """Witness LP over the belief simplex

    For a candidate alpha-vector w and a set of other alpha-vectors U,
    solves
        max d
        s.t. b @ (w - u) >= d for all u in U
             sum(b) = 1, b >= 0
    The optimal d is positive iff there is a belief at which w is strictly
    better than every vector of U.

    Variables are stored in a single S+1 vector x = (b, d).
    """
    def __init__(self, S):
        super().__init__("witness")
        self.S = S
        lb = np.zeros(S + 1)
        lb[-1] = -grb.GRB.INFINITY
        self.x = self.grbmodel.addMVar(
            shape=(S + 1,), vtype=grb.GRB.CONTINUOUS, lb=lb, name="x"
        )
        simplex = np.ones(S + 1)
        simplex[-1] = 0.0
        self.grbmodel.addConstr(simplex @ self.x == 1)
        self._obj = np.zeros(S + 1)
        self._obj[-1] = 1.0
        self._constr = None

    def witness(self, w, U):
        """Input:
            w: S vector
            U: S x K matrix of column alpha-vectors, K >= 1
        Output:
            (d, b): optimal margin and the belief attaining it
        """
        if self._constr is not None:
            self.grbmodel.remove(self._constr)
        lhs = np.c_[(w[:, np.newaxis] - U).T, -np.ones(U.shape[1])] # K x (S+1)
        self._constr = self.grbmodel.addConstr(lhs @ self.x >= 0)
        d = self.solve(self._obj @ self.x)
        return d, np.array(self.x.X[:self.S])
