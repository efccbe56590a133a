"""
Vector Commitment
=================

Commit to a vector m of length at most N and open single positions with
constant-size witnesses.

Formulas (0-indexed, g and h as in pointproofs.srs):
-----------------------------------------------------
Commitment:  C   := ∏_{i<len(m)} g[i]^{m_i}
Opening:     π   := ∏_{i<len(m)} g[N-pos+i]^{m_i}
                  = ∏_{i≠pos} G^{m_i α^{N-pos+i+1}}          (i = pos hits the hole)
Verify:      e(C^{1/m_pos}, h[N-pos-1]) · e(π^{-1/m_pos}, H) = t

Correctness:
    e(C, h[N-pos-1]) = e(G, H)^{∑_i m_i α^{N-pos+i+1}}
                     = e(π, H) · e(G, H)^{m_pos α^{N+1}}
                     = e(π, H) · t^{m_pos}
"""

import logging
from dataclasses import dataclass
from typing import List

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1

from .errors import DomainError, SizeError
from .groups import one, zero
from .keys import ProverKey, VerifierKey, check_compatible
from .utils import deserialize_element, gt_eq, multiexp_g1, pair_prod, serialize_element

logger = logging.getLogger(__name__)


def _decode_g1(data: bytes, group: PairingGroup) -> G1:
    element = deserialize_element(data, group)
    # charm elements carry their group in .type
    if getattr(element, 'type', None) != G1:
        raise SizeError("Encoded element is not a G1 point")
    return element


@dataclass(frozen=True)
class Commitment:
    """
    A commitment C ∈ G1 to a vector of dimension-N parameters.

    Commitments are additively homomorphic; in charm's multiplicative
    notation commit(m1) * commit(m2) == commit(m1 + m2).
    """
    group: PairingGroup
    element: G1
    dimension: int
    srs_id: str

    def __mul__(self, other: 'Commitment') -> 'Commitment':
        check_compatible(self.dimension, self.srs_id, other.dimension, other.srs_id, "commitment product")
        return Commitment(self.group, self.element * other.element, self.dimension, self.srs_id)

    def to_bytes(self) -> bytes:
        return serialize_element(self.element, self.group)

    @classmethod
    def from_bytes(cls, data: bytes, key) -> 'Commitment':
        """Rebuild a commitment for the parameter set of ``key`` (prover or verifier key)."""
        return cls(key.group, _decode_g1(data, key.group), key.dimension, key.srs_id)


@dataclass(frozen=True)
class Witness:
    """An opening proof π ∈ G1 for one position."""
    group: PairingGroup
    element: G1
    dimension: int
    srs_id: str

    def to_bytes(self) -> bytes:
        return serialize_element(self.element, self.group)

    @classmethod
    def from_bytes(cls, data: bytes, key) -> 'Witness':
        return cls(key.group, _decode_g1(data, key.group), key.dimension, key.srs_id)


def _check_length(messages: List[ZR], dimension: int):
    if len(messages) > dimension:
        raise SizeError(f"Message vector length {len(messages)} exceeds dimension N={dimension}")


def commit(prover_key: ProverKey, messages: List[ZR]) -> Commitment:
    """
    Commit to ``messages`` (length at most N).

    Formula:
    --------
    C := ∏_{i=0}^{len(m)-1} g[i]^{m_i}

    Examples
    --------
    >>> m = [group.random(ZR) for _ in range(n)]
    >>> C = commit(prover_key, m)
    """
    _check_length(messages, prover_key.dimension)

    element = multiexp_g1(prover_key.g[:len(messages)], messages, prover_key.group)
    logger.debug(f"Committed to {len(messages)} messages (N={prover_key.dimension})")
    return Commitment(prover_key.group, element, prover_key.dimension, prover_key.srs_id)


def prove_point_open(prover_key: ProverKey, messages: List[ZR], pos: int) -> Witness:
    """
    Generate the opening witness π for position ``pos``.

    Formula (Point opening proof):
    ------------------------------
    π := ∏_{i=0}^{len(m)-1} g[N-pos+i]^{m_i}

    The window is the commitment's window shifted by N-pos, so the term of
    m_pos is multiplied into the hole g[N] and drops out.

    Parameters
    ----------
    prover_key : ProverKey
        The prover key
    messages : List[ZR]
        The committed vector
    pos : int
        The position to open (0-indexed), 0 <= pos < len(messages)

    Returns
    -------
    Witness
        One G1 element, whatever the vector length
    """
    n = prover_key.dimension
    _check_length(messages, n)
    if pos < 0 or pos >= len(messages):
        raise SizeError(f"Position pos={pos} must be in [0, {len(messages)})")

    start = n - pos
    bases = prover_key.g[start:start + len(messages)]
    element = multiexp_g1(bases, messages, prover_key.group)
    return Witness(prover_key.group, element, n, prover_key.srs_id)


def verify(commitment: Commitment, verifier_key: VerifierKey, value: ZR, pos: int, witness: Witness) -> bool:
    """
    Check that ``value`` sits at position ``pos`` of the committed vector.

    Formula:
    --------
    e(C^{1/v}, h[N-pos-1]) · e(π^{-1/v}, H) = t

    Raises
    ------
    SetupMismatchError
        If the commitment or witness belongs to another parameter set
    SizeError
        If pos is outside [0, N)
    DomainError
        If value is zero (it has no inverse)

    Returns
    -------
    bool
        True if the equation holds, False otherwise
    """
    group = verifier_key.group
    n = verifier_key.dimension
    check_compatible(n, verifier_key.srs_id, commitment.dimension, commitment.srs_id, "commitment")
    check_compatible(n, verifier_key.srs_id, witness.dimension, witness.srs_id, "witness")
    if pos < 0 or pos >= n:
        raise SizeError(f"Position pos={pos} must be in [0, {n})")
    if value == zero(group):
        raise DomainError("Cannot verify the value zero: it has no multiplicative inverse")

    value_inverse = one(group) / value
    com = commitment.element ** value_inverse
    proof = witness.element ** (zero(group) - value_inverse)

    lhs = pair_prod([com, proof], [verifier_key.h[n - pos - 1], verifier_key.generator_h], group)
    return gt_eq(lhs, verifier_key.t, group)
