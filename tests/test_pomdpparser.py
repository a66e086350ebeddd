"""
Tests for the .pomdp file parser.
"""

import pytest
import numpy as np

from perseus.pomdpparser import POMDPParser
from perseus.models.tiger import TigerPOMDP


def test_parse_tiger_matches_builder(tiger_file):
    M = POMDPParser(str(tiger_file)).generatePOMDP()
    T = TigerPOMDP(discount=0.95)
    assert (M.S, M.A, M.O) == (2, 3, 2)
    assert M.discount == 0.95
    assert np.allclose(M.P, T.P)
    assert np.allclose(M.r, T.r)
    assert np.allclose(M.b0, [0.5, 0.5])


def test_cost_models_are_negated(tmp_path):
    path = tmp_path / "cost.pomdp"
    path.write_text(
        "discount: 0.9\nvalues: cost\nstates: 2\nactions: 1\nobservations: 1\n"
        "T: 0\nidentity\nO: 0\nuniform\n"
        "R: 0 : 0 : * : * 3\nR: 0 : 1 : * : * 5\n"
    )
    M = POMDPParser(str(path)).generatePOMDP()
    assert np.allclose(M.r, [[-3.0], [-5.0]])


def test_single_entries_and_rows(tmp_path):
    path = tmp_path / "entries.pomdp"
    path.write_text(
        "discount: 0.5\nstates: 2\nactions: 1\nobservations: 2\n"
        "start: 0.25 0.75\n"
        "T: 0 : 0 : 0 0.3\nT: 0 : 0 : 1 0.7\n"
        "T: 0 : 1\n0.4 0.6\n"
        "O: 0 : * : 0 0.5\nO: 0 : * : 1\n0.5\n"
        "R: 0 : 0 : 1\n1.0 3.0\n"
        "R: 0 : 1\n2.0 2.0\n2.0 2.0\n"
    )
    parser = POMDPParser(str(path))
    assert np.allclose(parser.PT[:, 0, :], [[0.3, 0.7], [0.4, 0.6]])
    assert np.allclose(parser.PZ[0], 0.5)
    assert np.allclose(parser.b0, [0.25, 0.75])
    M = parser.generatePOMDP()
    # from state 0 the reward is 1 or 3 (each w.p. 0.5) only when landing in 1
    assert np.isclose(M.r[0, 0], 0.7 * 2.0)
    assert np.isclose(M.r[1, 0], 2.0)


def test_named_elements_not_supported(tmp_path):
    path = tmp_path / "named.pomdp"
    path.write_text("discount: 0.5\nstates: left right\n")
    with pytest.raises(NotImplementedError):
        POMDPParser(str(path))


def test_unknown_line_raises(tmp_path):
    path = tmp_path / "broken.pomdp"
    path.write_text("discount: 0.5\nstates: 2\nfoo: bar\n")
    with pytest.raises(ValueError):
        POMDPParser(str(path))


def test_missing_discount_raises(tmp_path):
    path = tmp_path / "nodiscount.pomdp"
    path.write_text("states: 2\nactions: 1\nobservations: 1\n")
    with pytest.raises(ValueError):
        POMDPParser(str(path))
