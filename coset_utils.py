from perm import composition

def left_coset(g, H):
    return frozenset(composition(g, h) for h in H)

def right_coset(g, H):
    return frozenset(composition(h, g) for h in H)

def check_coset(g1, g2, H):
    '''
    Check if g1 and g2 are in the same left coset of H
    '''
    return g2 in left_coset(g1, H)

def check_contained(G, H):
    return all(h in G for h in H)

def index(G, H):
    '''
    G: Subgroup
    H: Subgroup of G
    Returns [G : H]
    '''
    if not check_contained(G, H):
        raise ValueError('{!r} is not contained in {!r}'.format(H, G))
    return len(G) // len(H)

def coset_reps(G, H):
    '''
    G: Subgroup
    H: Subgroup of G
    Returns a list of Perm objects, the smallest element of each left coset gH
    '''
    n_cosets = index(G, H)
    reps = []
    to_visit = set(G)

    # G iterates in sorted order so the first unseen element of a coset is its minimum
    for g in G:
        if g not in to_visit:
            continue
        reps.append(g)
        to_visit -= left_coset(g, H)
        if len(reps) == n_cosets:
            break

    return reps
