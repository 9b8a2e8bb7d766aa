"""
Edge-pushing stages for one node of the reverse sweep.

Follows the componentwise edge-pushing algorithm of Gower & Mello:
for i = L ... k
    (1) Pushing   move weights W(i, p) that involve node i onto its parents
    (2) Creating  add vbar[i] * (local second derivatives of node i)
    (3) Adjoint   ordinary first-order propagation (done by the tape)

Nodes have at most two parents (px, py); a missing parent is the node's own
slot with zero partials, which contributes nothing.
"""


def pushing_stage(W, node, i: int) -> None:
    """
    Push every non-zero W(i, p), p <= i, onto the parents of node i.

    Case p != i: W(i,p) moves to W(px,p) scaled by dx and to W(py,p) scaled
                 by dy; when a parent *is* p the entry lands on the diagonal
                 twice (both symmetric halves collapse onto W(p,p)).
    Case p == i: the diagonal weight spreads over all four parent pairs,
                 scaled by products of the first partials.
    """
    px, py = node.px, node.py
    dx, dy = node.dx, node.dy
    for p, w in W.neighbors(i):
        if p != i:
            if px != p:
                W.add_sym(px, p, dx * w)
            else:
                W.add_diag(p, 2 * dx * w)

            if py != p:
                W.add_sym(py, p, dy * w)
            else:
                W.add_diag(p, 2 * dy * w)
        else:
            W.add_diag(px, dx * dx * w)
            W.add_sym(px, py, dx * dy * w)
            W.add_diag(py, dy * dy * w)
    W.retire(i)


def creating_stage(W, node, vbar) -> None:
    """
    Creating stage: W += vbar * Φ''ᵢ, the node's own second-order contribution.
    """
    if vbar == 0:
        return  # No contribution if adjoint is zero
    W.add_diag(node.px, vbar * node.dxx)
    W.add_sym(node.px, node.py, vbar * node.dxy)
    W.add_diag(node.py, vbar * node.dyy)
