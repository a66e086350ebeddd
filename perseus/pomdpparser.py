# Reads Cassandra's .pomdp format, following the layout of
# Maxwell Forbes's parser in https://github.com/mbforbes/py-pomdp
# Specifying states, actions, or observations by name is not supported
import numpy as np
from perseus.pomdpmodel import POMDP

class POMDPParser():
    def __init__(self, filename):
        with open(filename) as fh:
            self.contents = [
                x.split('#')[0].strip() for x in fh
                if not (x.startswith('#') or x.isspace())
            ]
        self.contents = [x for x in self.contents if x]

        self.S, self.A, self.O = 0, 0, 0
        self.discount = None
        self.values = "reward"
        self.PT, self.PZ, self.r, self.b0 = None, None, None, None
        i = 0
        while i < len(self.contents):
            line = self.contents[i]
            if line.startswith("discount:"):
                self.discount = float(line.split()[1])
                i += 1
            elif line.startswith("states:"):
                i, self.S = self.__get_sao(i)
            elif line.startswith("actions:"):
                i, self.A = self.__get_sao(i)
            elif line.startswith("observations:"):
                i, self.O = self.__get_sao(i)
            elif line.startswith("values:"):
                self.values = line.split()[1]
                if self.values not in ("reward", "cost"):
                    raise ValueError("Values should be reward or cost: " + line)
                i += 1
            elif line.startswith("start:"):
                i = self.__get_start_dist(i)
            elif line.startswith("T:"):
                i = self.__get_transition_kernel(i)
            elif line.startswith("O:"):
                i = self.__get_observation_kernel(i)
            elif line.startswith("R:"):
                i = self.__get_rewards(i)
            else:
                raise ValueError("Cannot parse line " + line)

            if (self.PT is None) and self.S > 0 and self.A > 0 and self.O > 0:
                self.PT = np.zeros((self.S, self.A, self.S))
                self.PZ = np.zeros((self.A, self.S, self.O))
                self.r = np.zeros((self.S, self.A, self.O, self.S))

        if self.PT is None:
            raise ValueError("Missing states, actions or observations in " + filename)
        if self.discount is None:
            raise ValueError("Missing discount in " + filename)

    def generatePOMDP(self):
        M = POMDP((self.PT, self.PZ), self.r, self.discount, self.b0)
        if self.values == "cost":
            M.negate()
        return M

    def __get_sao(self, i):
        pieces = self.contents[i].split()
        if not pieces[1].isnumeric():
            raise NotImplementedError("Please specify number of " + pieces[0][:-1])
        return i + 1, int(pieces[1])

    def __get_start_dist(self, i):
        pieces = [x for x in self.contents[i].split() if (x.find(':') == -1)]
        if len(pieces) == 0:
            probs = self.contents[i+1].split()
            next_i = i + 2
        else:
            probs = pieces
            next_i = i + 1
        if probs == ["uniform"]:
            self.b0 = np.ones(self.S) / self.S
            return next_i
        if len(probs) != self.S:
            raise ValueError("Start distribution should have {0} entries".format(self.S))
        self.b0 = np.array([float(x) for x in probs])
        return next_i

    def __pieces(self, i):
        # "T: 0 : 1 : 2 0.5" and "T:0:1:2 0.5" both split into ["0", "1", "2", "0.5"]
        line = self.contents[i]
        body = line[line.find(':') + 1:]
        return body.replace(':', ' ').split()

    def __matrix(self, i, nrows, ncols):
        rows = [self.contents[i + k].split() for k in range(nrows)]
        if any(len(row) != ncols for row in rows):
            raise ValueError("Expecting {0} x {1} matrix after line {2}".format(
                nrows, ncols, self.contents[i-1]))
        return np.array([[float(x) for x in row] for row in rows])

    def __get_transition_kernel(self, i):
        pieces = self.__pieces(i)
        action = _idx(pieces[0])

        if len(pieces) == 4:
            # case 1: T: <action> : <start-state> : <next-state> %f
            start_state = _idx(pieces[1])
            next_state = _idx(pieces[2])
            self.PT[start_state, action, next_state] = float(pieces[3])
            return i + 1
        elif len(pieces) == 3:
            # case 2: T: <action> : <start-state> : <next-state>
            # %f
            start_state = _idx(pieces[1])
            next_state = _idx(pieces[2])
            self.PT[start_state, action, next_state] = float(self.contents[i+1])
            return i + 2
        elif len(pieces) == 2:
            # case 3: T: <action> : <start-state>
            # %f %f ... %f
            start_state = _idx(pieces[1])
            next_line = self.contents[i+1]
            if next_line == "uniform":
                self.PT[start_state, action, :] = 1.0 / self.S
                return i + 2
            self.PT[start_state, action, :] = self.__matrix(i+1, 1, self.S)[0]
            return i + 2
        elif len(pieces) == 1:
            next_line = self.contents[i+1]
            if next_line == "identity":
                # case 4: T: <action>
                # identity
                self.PT[:, action, :] = np.eye(self.S)
                return i + 2
            elif next_line == "uniform":
                # case 5: T: <action>
                # uniform
                self.PT[:, action, :] = 1.0 / self.S
                return i + 2
            else:
                # case 6: T: <action>
                # S x S' matrix
                self.PT[:, action, :] = self.__matrix(i+1, self.S, self.S)
                return i + 1 + self.S
        else:
            raise ValueError("Cannot parse line " + self.contents[i])

    def __get_observation_kernel(self, i):
        pieces = self.__pieces(i)
        action = _idx(pieces[0])

        if len(pieces) == 4:
            # case 1: O: <action> : <next-state> : <obs> %f
            next_state = _idx(pieces[1])
            obs = _idx(pieces[2])
            self.PZ[action, next_state, obs] = float(pieces[3])
            return i + 1
        elif len(pieces) == 3:
            # case 2: O: <action> : <next-state> : <obs>
            # %f
            next_state = _idx(pieces[1])
            obs = _idx(pieces[2])
            self.PZ[action, next_state, obs] = float(self.contents[i+1])
            return i + 2
        elif len(pieces) == 2:
            # case 3: O: <action> : <next-state>
            # %f %f ... %f
            next_state = _idx(pieces[1])
            next_line = self.contents[i+1]
            if next_line == "uniform":
                self.PZ[action, next_state, :] = 1.0 / self.O
                return i + 2
            self.PZ[action, next_state, :] = self.__matrix(i+1, 1, self.O)[0]
            return i + 2
        elif len(pieces) == 1:
            next_line = self.contents[i+1]
            if next_line == "identity":
                # case 4: O: <action>
                # identity
                if self.S != self.O:
                    raise ValueError("Identity observations need as many observations as states")
                self.PZ[action, :, :] = np.eye(self.S)
                return i + 2
            elif next_line == "uniform":
                # case 5: O: <action>
                # uniform
                self.PZ[action, :, :] = 1.0 / self.O
                return i + 2
            else:
                # case 6: O: <action>
                # S' x O matrix
                self.PZ[action, :, :] = self.__matrix(i+1, self.S, self.O)
                return i + 1 + self.S
        else:
            raise ValueError("Cannot parse line: " + self.contents[i])

    def __get_rewards(self, i):
        pieces = self.__pieces(i)
        if len(pieces) < 2:
            raise ValueError("Cannot parse line: " + self.contents[i])
        action = _idx(pieces[0])
        start_state = _idx(pieces[1])

        if len(pieces) >= 4:
            # case 1: R: <action> : <start-state> : <next-state> : <obs> %f
            # (the value may also sit on the next line)
            next_state = _idx(pieces[2])
            obs = _idx(pieces[3])
            reward = float(self.contents[i+1]) if len(pieces) == 4 else float(pieces[-1])
            self.r[start_state, action, obs, next_state] = reward
            return i + 1 + (len(pieces) == 4)
        elif len(pieces) == 3:
            # case 2: R: <action> : <start-state> : <next-state>
            # %f %f ... %f
            next_state = _idx(pieces[2])
            row = self.__matrix(i+1, 1, self.O)[0]
            self.r[start_state, action, :, next_state] = row
            return i + 2
        else:
            # case 3: R: <action> : <start-state>
            # S' x O matrix
            mat = self.__matrix(i+1, self.S, self.O)
            self.r[start_state, action, :, :] = mat.T
            return i + 1 + self.S


def _idx(s):
    if s == "*":
        return slice(None)
    if not s.isnumeric():
        raise NotImplementedError("Named elements are not supported: " + s)
    return int(s)
