"""The tiger problem (Kaelbling, Littman and Cassandra 1998)

A tiger hides behind one of two doors. Listening costs 1 and tells the
right door with probability listenaccuracy; opening the door hiding the
tiger costs 100, opening the other one pays 10. After a door is opened the
tiger is placed again uniformly at random.

States: 0 tiger-left, 1 tiger-right
Actions: 0 listen, 1 open-left, 2 open-right
Observations: 0 hear-left, 1 hear-right
"""

import numpy as np

from perseus.pomdpmodel import POMDP


def TigerPOMDP(discount=0.95, listenaccuracy=0.85):
    S, A, O = 2, 3, 2
    PT = np.zeros((S, A, S))
    PZ = np.zeros((A, S, O))
    r = np.zeros((S, A))

    # state transition
    PT[:, 0, :] = np.eye(S) # listening does not move the tiger
    PT[:, 1:, :] = 1 / S # opening a door resets the problem

    # observation distribution
    PZ[0] = listenaccuracy * np.eye(S) + (1 - listenaccuracy) * (1 - np.eye(S))
    PZ[1:] = 1 / O # nothing to hear after opening a door

    # instantaneous reward
    r[:, 0] = -1
    r[0, 1], r[1, 1] = -100, 10
    r[0, 2], r[1, 2] = 10, -100

    return POMDP((PT, PZ), r, discount)
