"""
Structured Reference String (SRS) Generation
============================================

This module generates the SRS for the vector commitment scheme of dimension N.

The SRS consists of powers of a secret α in both source groups plus a target
group anchor:
- For G:   g[i] := G^{α^{i+1}}      for i ∈ [0, 2N), i ≠ N
           g[N] := 1_G              (the hole, exponent α^{N+1})
- For Ĝ:   h[i] := H^{α^{i+1}}      for i ∈ [0, N)
- Anchor:  t := e(G, H)^{α^{N+1}}

The hole is what makes the scheme binding: nobody can compute G^{α^{N+1}}
from the published parameters, yet the verifier can test against it through t.

Index Convention:
-----------------
- Commitments use the window g[0 .. len(m))
- An opening for position pos uses the window g[N-pos .. N-pos+len(m)),
  where the term of m[pos] lands exactly on the hole g[N]
- The verifier pairs with h[N-pos-1] = H^{α^{N-pos}}

Security:
---------
- α is sampled, used to build the power sequence and dropped; it is never
  stored in the returned object
- In a real deployment the setup must run as a trusted ceremony
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from charm.toolbox.pairinggroup import PairingGroup, G1, G2, GT, pair

from .errors import SizeError
from .groups import get_generators, random_scalar, zero
from .utils import fingerprint, parallel_map, prepare_batch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StructuredReferenceString:
    """
    Public parameters of dimension N.

    Attributes
    ----------
    group : PairingGroup
        The pairing group
    dimension : int
        The maximum vector length N
    g : Tuple[G1, ...]
        2N elements of G1, g[N] is the identity
    h : Tuple[G2, ...]
        N elements of G2
    t : GT
        The anchor e(G, H)^{α^{N+1}}
    generator_h : G2
        The fixed generator H
    """
    group: PairingGroup
    dimension: int
    g: Tuple[G1, ...]
    h: Tuple[G2, ...]
    t: GT
    generator_h: G2

    @property
    def hole(self) -> int:
        return self.dimension

    @property
    def identifier(self) -> str:
        """Fingerprint shared by every key derived from this SRS."""
        return fingerprint(self.t, self.group)

    def validate(self) -> bool:
        """
        Validate that the SRS is well-formed.

        Checks:
        - g has 2N elements
        - h has N elements
        - the hole g[N] is the identity of G1
        """
        n = self.dimension
        if n < 1:
            return False
        if len(self.g) != 2 * n:
            return False
        if len(self.h) != n:
            return False
        return self.g[n] == self.group.init(G1, 1)


def generate_srs(group: PairingGroup, dimension: int, rng=None) -> StructuredReferenceString:
    """
    Run the trusted setup for vectors of length at most ``dimension``.

    Parameters
    ----------
    group : PairingGroup
        The initialized pairing group from setup()
    dimension : int
        The maximum vector length N (N >= 1)
    rng : random.Random, optional
        Randomness source for α. When None, charm's RNG is used.

    Returns
    -------
    StructuredReferenceString
        The public parameters; α is not part of them

    Examples
    --------
    >>> from pointproofs.groups import setup
    >>> params = setup('MNT224')
    >>> srs = generate_srs(params['group'], 16)
    >>> srs.g[srs.hole] == params['group'].init(G1, 1)
    True
    """
    if dimension < 1:
        raise SizeError(f"SRS dimension must be at least 1, got {dimension}")

    logger.info(f"Generating SRS of dimension {dimension}")
    G, H = get_generators(group)

    # powers[i] = α^{i+1} for i ∈ [0, 2N)
    alpha = random_scalar(group, rng)
    powers = [alpha]
    for _ in range(1, 2 * dimension):
        powers.append(powers[-1] * alpha)
    del alpha

    # The anchor takes the hole power before it is zeroed
    hole = dimension
    t = pair(G ** powers[hole], H)
    powers[hole] = zero(group)

    g = parallel_map(lambda power: G ** power, powers)
    h = parallel_map(lambda power: H ** power, powers[:dimension])
    del powers

    srs = StructuredReferenceString(
        group=group,
        dimension=dimension,
        g=prepare_batch(g),
        h=prepare_batch(h),
        t=t,
        generator_h=H,
    )
    logger.info(f"Generated SRS with {len(srs.g)} G1 and {len(srs.h)} G2 elements")
    return srs
