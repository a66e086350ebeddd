"""PERSEUS: randomized point-based value iteration for POMDPs

Basic usage:
1. Generate a POMDP class object, either directly from numpy arrays, from
a .pomdp file with POMDPParser, or from one of the models in the models
folder.
2. Initialize a PERSEUS class object with the number of beliefs to sample,
the horizon and the convergence threshold epsilon.
3. Run PERSEUS.Solve, which returns the last variation and the value
function, a list of VLists.

See runtiger.py for an example
"""

# POMDP models
from .pomdpmodel import POMDP
from .pomdpparser import POMDPParser

# value function containers
from .vfun import VEntry, VList, weak_bound_distance, bestaction

# PERSEUS algorithm class
from .core import PERSEUS, PerseusValueIteration

# building blocks
from .beliefgen import BeliefGenerator
from .projecter import Projecter
from .prune import prune
