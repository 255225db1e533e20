from functools import total_ordering
from itertools import permutations
import numpy as np
from utils import lcm


class InvalidPermutation(ValueError):
    pass


def is_bijection(mapping):
    '''
    mapping: sequence of ints
    Returns True if every symbol in range(len(mapping)) occurs exactly once
    '''
    n = len(mapping)
    seen = [False] * n
    for v in mapping:
        if not isinstance(v, (int, np.integer)) or v < 0 or v >= n or seen[v]:
            return False
        seen[v] = True
    return True


@total_ordering
class Perm:
    '''
    Permutation of the symbols {0, 1, ..., n-1}, stored as the tuple of images.
    Ex: Perm((1, 2, 0)) sends 0 -> 1, 1 -> 2, 2 -> 0.
    '''
    __slots__ = ('mapping',)

    def __init__(self, mapping, check=True):
        if check:
            mapping = tuple(mapping)
            if not is_bijection(mapping):
                raise InvalidPermutation('Not a permutation: {}'.format(mapping))
            mapping = tuple(int(x) for x in mapping)
        self.mapping = mapping

    @staticmethod
    def from_cycles(n, *cycles):
        '''
        n: degree
        cycles: disjoint tuples of symbols, ie (0, 1), (2, 3, 4)
        Returns the product of the cycles as a Perm of degree n
        '''
        lst = list(range(n))
        for cyc in cycles:
            for idx, x in enumerate(cyc):
                lst[x] = cyc[(idx + 1) % len(cyc)]
        return Perm(lst)

    @property
    def degree(self):
        return len(self.mapping)

    def __getitem__(self, x):
        return self.mapping[x]

    def __call__(self, x):
        return self.mapping[x]

    def __len__(self):
        return len(self.mapping)

    def __iter__(self):
        return iter(self.mapping)

    def __mul__(self, other):
        return composition(self, other)

    def inv(self):
        return invert(self)

    def __hash__(self):
        return hash(self.mapping)

    def __eq__(self, other):
        if not isinstance(other, Perm):
            return NotImplemented
        return self.mapping == other.mapping

    def __lt__(self, other):
        if not isinstance(other, Perm):
            return NotImplemented
        return (len(self.mapping), self.mapping) < (len(other.mapping), other.mapping)

    def __reduce__(self):
        return (Perm, (self.mapping, False))

    def __repr__(self):
        return 'Perm({})'.format(self.mapping)

    def __str__(self):
        cycles = self.cycle_decomposition()
        if not cycles:
            return '()'
        return ''.join(str(tuple(c)) for c in cycles)

    def cycle_decomposition(self):
        '''
        Returns the list of cycles of length > 1, each starting at its smallest symbol
        '''
        cyc_decomp = []
        seen = set()
        for i in range(len(self.mapping)):
            if i in seen:
                continue
            curr_cycle = [i]
            seen.add(i)
            curr = self.mapping[i]
            while curr != i:
                curr_cycle.append(curr)
                seen.add(curr)
                curr = self.mapping[curr]
            if len(curr_cycle) > 1:
                cyc_decomp.append(curr_cycle)
        return cyc_decomp

    def order(self):
        # lcm of cycle lengths
        cycle_lengths = [len(c) for c in self.cycle_decomposition()]
        return lcm(*cycle_lengths)

    def matrix(self):
        n = len(self.mapping)
        p_matrix = np.zeros((n, n), dtype=int)

        # j->i   ===> p[i, j] = 1
        for j, i in enumerate(self.mapping):
            p_matrix[i, j] = 1
        return p_matrix


def identity(n):
    return Perm(tuple(range(n)), check=False)


def make_permutation(mapping):
    '''
    mapping: sequence of ints
    Returns a Perm if mapping is a bijection on range(len(mapping)), otherwise None
    '''
    try:
        return Perm(mapping)
    except InvalidPermutation:
        return None


def composition(g, h):
    '''
    Returns the permutation x -> g(h(x)), ie h is applied first
    '''
    assert len(g.mapping) == len(h.mapping), \
        'Cannot compose permutations of degree {} and {}'.format(g.degree, h.degree)
    gm = g.mapping
    return Perm(tuple(gm[x] for x in h.mapping), check=False)


def invert(g):
    rev_lst = [0] * len(g.mapping)
    for idx, v in enumerate(g.mapping):
        rev_lst[v] = idx
    return Perm(tuple(rev_lst), check=False)


def sn(n):
    '''
    All n! permutations of degree n in lexicographic order
    '''
    return [Perm(t, check=False) for t in permutations(range(n))]


if __name__ == '__main__':
    x = Perm.from_cycles(4, (0, 1))
    y = Perm.from_cycles(4, (2, 3))
    print(x * y, (x * y).order())
    print((x * y).matrix())
