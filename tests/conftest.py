"""
Shared fixtures for the PERSEUS tests.
"""

import pytest
import numpy as np

from perseus.pomdpmodel import POMDP
from perseus.models.tiger import TigerPOMDP


@pytest.fixture
def tiger():
    return TigerPOMDP(discount=0.95)


@pytest.fixture
def random_pomdp():
    """A random 3 state, 2 action, 2 observation model."""
    rng = np.random.default_rng(12345)
    S, A, O = 3, 2, 2
    PT = rng.dirichlet(np.ones(S), size=(S, A))
    PZ = rng.dirichlet(np.ones(O), size=(A, S))
    r = rng.uniform(-5.0, 5.0, size=(S, A))
    return POMDP((PT, PZ), r, 0.9)


@pytest.fixture
def noobs_pomdp():
    """Two states, two actions and a single uninformative observation."""
    PT = np.array([
        [[0.9, 0.1], [0.2, 0.8]],
        [[0.5, 0.5], [0.1, 0.9]],
    ]) # S x A x S'
    PZ = np.ones((2, 2, 1))
    r = np.array([[1.0, 0.0], [-1.0, 2.0]])
    return POMDP((PT, PZ), r, 0.9)


TIGER_FILE = """# the tiger problem
discount: 0.95
values: reward
states: 2
actions: 3
observations: 2
start: uniform

T: 0
identity
T: 1
uniform
T: 2
uniform

O: 0
0.85 0.15
0.15 0.85
O: 1
uniform
O: 2
uniform

R: 0 : * : * : * -1
R: 1 : 0 : * : * -100
R: 1 : 1 : * : * 10
R: 2 : 0 : * : * 10
R: 2 : 1 : * : * -100
"""


@pytest.fixture
def tiger_file(tmp_path):
    path = tmp_path / "tiger.pomdp"
    path.write_text(TIGER_FILE)
    return path
