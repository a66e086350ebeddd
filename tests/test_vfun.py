"""
Tests for the value function containers.
"""

import pytest
import numpy as np

from perseus.vfun import (
    VEntry,
    VList,
    initialvlist,
    weak_bound_distance,
    bestaction,
)


def test_initial_vlist():
    vlist = initialvlist(3, -100.0)
    assert len(vlist) == 1
    entry = vlist[0]
    assert np.allclose(entry.values, -100.0)
    assert entry.action == 0
    assert len(entry.obs) == 0


def test_best_at_belief_breaks_ties_with_first():
    vlist = VList(np.array([[1.0, 0.0, 1.0], [0.0, 1.0, 0.0]]), [0, 1, 2], np.zeros((3, 1)))
    idx, vb = vlist.bestatbelief(np.array([1.0, 0.0]))
    assert idx == 0 and vb == 1.0
    idx, vb = vlist.bestatbelief(np.array([0.5, 0.5]))
    assert idx == 0 and np.isclose(vb, 0.5)
    assert np.isclose(vlist.value(np.array([0.2, 0.8])), 0.8)


def test_empty_vlist_cannot_be_evaluated():
    vlist = VList.fromentries([], 2, 1)
    assert len(vlist) == 0
    with pytest.raises(ValueError):
        vlist.bestatbelief(np.array([0.5, 0.5]))


def test_fromentries_roundtrip_and_iteration():
    entries = [
        VEntry(np.array([1.0, 2.0]), 1, np.array([0, 3])),
        VEntry(np.array([0.0, 5.0]), 0, np.array([2, 2])),
    ]
    vlist = VList.fromentries(entries, 2, 2)
    assert vlist.alp.shape == (2, 2)
    assert [e.action for e in vlist] == [1, 0]
    assert list(vlist[0].obs) == [0, 3]
    sub = vlist.subset([1])
    assert len(sub) == 1 and sub[0].action == 0


def test_weak_bound_distance():
    oldV = initialvlist(2, 0.0)
    newV = VList(np.array([[1.0, 0.5], [2.0, 0.5]]), [0, 1], np.zeros((2, 1)))
    assert np.isclose(weak_bound_distance(oldV, newV), 2.0)
    assert weak_bound_distance(newV, newV) == 0.0


def test_weak_bound_distance_picks_closest_old_vector():
    oldV = VList(np.array([[0.0, 1.0], [0.0, 1.0]]), [0, 0], np.zeros((2, 1)))
    newV = VList(np.array([[1.5], [1.0]]), [0], np.zeros((1, 1)))
    assert np.isclose(weak_bound_distance(oldV, newV), 0.5)


def test_bestaction_uses_last_vlist():
    V = [
        initialvlist(2, -1.0),
        VList(np.array([[3.0, 0.0], [0.0, 3.0]]), [2, 1], np.zeros((2, 1))),
    ]
    a, vb = bestaction(V, np.array([0.1, 0.9]))
    assert a == 1 and np.isclose(vb, 2.7)
