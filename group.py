import logging
from collections import deque
from functools import total_ordering
from perm import Perm, identity, composition, invert

log = logging.getLogger(__name__)

@total_ordering
class Subset:
    '''
    A nonempty set of permutations that all act on the same number of symbols.
    The elements are kept as a sorted tuple so that subsets compare lexicographically.
    '''
    def __init__(self, size, elements):
        '''
        size: int, the common degree of the elements
        elements: iterable of Perm objects
        '''
        self.size = size
        self._members = frozenset(elements)
        self.elements = tuple(sorted(self._members))

    def __len__(self):
        return len(self.elements)

    def __iter__(self):
        return iter(self.elements)

    def __contains__(self, g):
        return g in self._members

    def _key(self):
        return (self.size, self.elements)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self):
        return hash((type(self).__name__, self.size, self.elements))

    def __repr__(self):
        return '{}(size={}, order={})'.format(type(self).__name__, self.size, len(self.elements))

    def __str__(self):
        return '{{{}}}'.format(', '.join(str(g) for g in self.elements))


class Subgroup(Subset):
    '''
    Subset closed under composition and inversion. Only built by check_closed
    or by the closure functions below.
    '''
    @property
    def order(self):
        return len(self.elements)


class ConjugacyClass(Subset):
    pass


def subset_size(elements):
    '''
    elements: collection of Perm objects
    Returns the common degree, or None if the degrees differ or there are no elements
    '''
    size = None
    for g in elements:
        if size is None:
            size = g.degree
        elif g.degree != size:
            return None
    return size

def make_subset(elements):
    elements = list(elements)
    size = subset_size(elements)
    if size is None:
        return None
    return Subset(size, elements)

def check_closed(subset):
    '''
    subset: Subset
    Returns the subset as a Subgroup if g * h^-1 is a member for all members g, h.
    Otherwise returns None.
    '''
    inverses = [invert(h) for h in subset.elements]
    for g in subset.elements:
        for h_inv in inverses:
            if composition(g, h_inv) not in subset:
                log.debug('Rejecting %r: not closed under g * h^-1', subset)
                return None
    return Subgroup(subset.size, subset.elements)

def make_subgroup(elements):
    subset = make_subset(elements)
    if subset is None:
        return None
    return check_closed(subset)

def trivial(size):
    return make_subgroup([identity(size)])

def conjugate(subgroup, g):
    '''
    subgroup: Subgroup
    g: Perm
    Returns the subgroup {g x g^-1 : x in subgroup}
    '''
    g_inv = invert(g)
    newgroup = [composition(g, composition(x, g_inv)) for x in subgroup.elements]
    return make_subgroup(newgroup)

def generate_fixpoint(generators):
    '''
    generators: Subset
    Returns the Subgroup generated by the given permutations.

    Repeatedly multiplies together everything generated so far until a pass
    produces nothing new. Each pass only forms the products involving an element
    that showed up in the previous pass, since all the other products are already in.
    '''
    result = set(generators.elements)
    frontier = set(result)
    while frontier:
        new_elems = set()
        for g in result:
            for h in frontier:
                for prod in (composition(g, h), composition(h, g)):
                    if prod not in result:
                        new_elems.add(prod)
        result |= new_elems
        frontier = new_elems

    return Subgroup(generators.size, result)

def generate(generators):
    '''
    generators: Subset
    Same result as generate_fixpoint, but walks a queue of pending products.
    Each new element is only multiplied against what has been found so far,
    at the price of holding the queue of pending pairs in memory.
    '''
    gens = generators.elements
    result = {identity(generators.size)}
    result.update(gens)
    to_visit = deque((g, h) for g in gens for h in gens)

    while to_visit:
        g, h = to_visit.popleft()
        prod = composition(g, h)
        if prod not in result:
            result.add(prod)
            for x in list(result):
                to_visit.append((x, prod))
                to_visit.append((prod, x))

    return Subgroup(generators.size, result)

def symmetric_generators(size):
    '''
    Returns the n-cycle (0 1 ... n-1) and the transposition (0 1) as a Subset
    '''
    cycle = Perm(list(range(1, size)) + [0])
    transposition = Perm([1, 0] + list(range(2, size)))
    return make_subset([cycle, transposition])

def elements(size):
    '''
    Returns the symmetric group S_n as a Subgroup. Requires n > 1.
    '''
    if size <= 1:
        raise ValueError('Symmetric group needs at least 2 symbols, got {}'.format(size))
    return generate_fixpoint(symmetric_generators(size))

def conjugacy_classes(group):
    '''
    group: Subgroup
    Returns a sorted list of ConjugacyClass objects partitioning the group's elements
    '''
    remaining = set(group.elements)
    classes = []
    for x in group.elements:
        if x not in remaining:
            continue
        orbit = {composition(g, composition(x, invert(g))) for g in group.elements}
        remaining -= orbit
        classes.append(ConjugacyClass(group.size, orbit))
    return sorted(classes)

def conjugates(subgroup, group):
    '''
    Returns the set of subgroups conjugate to subgroup by elements of group
    '''
    assert subgroup.size == group.size
    return {conjugate(subgroup, g) for g in group.elements}

def is_normal(subgroup, group):
    return all(conjugate(subgroup, g) == subgroup for g in group.elements)
