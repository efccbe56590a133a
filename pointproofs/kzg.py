"""
KZG Polynomial Commitments
==========================

Commit to a univariate polynomial p(X) over Z_p and prove single
evaluations p(z) = v with one G1 element.

Formulas:
---------
Setup:       powers_of_g[i]       = G^{β^i}          i ∈ [0, d]
             powers_of_gamma_g[i] = (γG)^{β^i}       i ∈ [0, d+1]
             h = H,  beta_h = H^β
Commit:      C = ∏ powers_of_g[i]^{p_i}  (· ∏ powers_of_gamma_g[i]^{r_i} when hiding)
Open:        w(X) = (p(X) - p(z)) / (X - z),   π = ∏ powers_of_g[i]^{w_i}
Check:       e(C · G^{-v} · (γG)^{-r(z)}, H) = e(π, H^{β} · H^{-z})

The blinding polynomial r(X) is only present for hiding commitments.
"""

import logging
import secrets
from dataclasses import dataclass
from typing import Optional, Tuple

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1, G2, pair

from .errors import SizeError
from .groups import get_generators, one, random_scalar, scalar
from .polynomial import DensePolynomial
from .utils import div, gt_eq, multiexp_g1, parallel_map, prepare_batch, skip_leading_zeros_and_convert

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UniversalParams:
    """Output of the KZG trusted setup, valid for degrees up to max_degree."""
    group: PairingGroup
    powers_of_g: Tuple[G1, ...]
    powers_of_gamma_g: Tuple[G1, ...]
    h: G2
    beta_h: G2

    @property
    def max_degree(self) -> int:
        return len(self.powers_of_g) - 1


@dataclass(frozen=True)
class Powers:
    """Trimmed prover key."""
    group: PairingGroup
    powers_of_g: Tuple[G1, ...]
    powers_of_gamma_g: Tuple[G1, ...]

    def size(self) -> int:
        return len(self.powers_of_g)


@dataclass(frozen=True)
class KZGVerifierKey:
    group: PairingGroup
    g: G1
    gamma_g: G1
    h: G2
    beta_h: G2


@dataclass(frozen=True)
class KZGCommitment:
    group: PairingGroup
    element: G1


@dataclass(frozen=True)
class Randomness:
    """The blinding polynomial of a commitment; the zero polynomial when not hiding."""
    blinding_polynomial: DensePolynomial

    @classmethod
    def empty(cls, modulus: int) -> 'Randomness':
        return cls(DensePolynomial.zero(modulus))

    def is_hiding(self) -> bool:
        return not self.blinding_polynomial.is_zero()


@dataclass(frozen=True)
class Proof:
    """An evaluation proof: w ∈ G1 and, for hiding commitments, r(z)."""
    w: G1
    random_v: Optional[ZR] = None


def setup(group: PairingGroup, max_degree: int, rng=None) -> UniversalParams:
    """
    Run the KZG trusted setup for polynomials of degree at most ``max_degree``.

    Parameters
    ----------
    group : PairingGroup
        The initialized pairing group
    max_degree : int
        The largest supported degree (>= 1)
    rng : random.Random, optional
        Randomness source for β and γ. When None, charm's RNG is used.
    """
    if max_degree < 1:
        raise SizeError(f"max_degree must be at least 1, got {max_degree}")

    logger.info(f"Running KZG setup for max degree {max_degree}")
    G, H = get_generators(group)
    beta = random_scalar(group, rng)
    gamma_g = G ** random_scalar(group, rng)

    # β^0 .. β^{d+1} by repeated multiplication
    powers_of_beta = [one(group)]
    for _ in range(max_degree + 1):
        powers_of_beta.append(powers_of_beta[-1] * beta)

    powers_of_g = parallel_map(lambda power: G ** power, powers_of_beta[:max_degree + 1])
    powers_of_gamma_g = parallel_map(lambda power: gamma_g ** power, powers_of_beta)
    beta_h = H ** beta
    del beta, powers_of_beta

    return UniversalParams(
        group=group,
        powers_of_g=prepare_batch(powers_of_g),
        powers_of_gamma_g=prepare_batch(powers_of_gamma_g),
        h=H,
        beta_h=beta_h,
    )


def trim(params: UniversalParams, supported_degree: int) -> Tuple[Powers, KZGVerifierKey]:
    """
    Specialize the universal parameters to degree ``supported_degree``.

    Degree 1 is bumped to 2 so the basis never degenerates to a single term.
    """
    if supported_degree == 1:
        supported_degree += 1
    if supported_degree < 0 or supported_degree > params.max_degree:
        raise SizeError(f"Cannot trim to degree {supported_degree}: parameters support up to {params.max_degree}")

    powers = Powers(
        group=params.group,
        powers_of_g=params.powers_of_g[:supported_degree + 1],
        powers_of_gamma_g=params.powers_of_gamma_g[:supported_degree + 1],
    )
    vk = KZGVerifierKey(
        group=params.group,
        g=params.powers_of_g[0],
        gamma_g=params.powers_of_gamma_g[0],
        h=params.h,
        beta_h=params.beta_h,
    )
    logger.debug(f"Trimmed KZG parameters to degree {supported_degree}")
    return powers, vk


def check_degree_is_too_large(degree: int, num_powers: int):
    num_coefficients = degree + 1
    if num_coefficients > num_powers:
        raise SizeError(f"Polynomial has {num_coefficients} coefficients, key supports {num_powers}")


def check_hiding_bound(hiding_poly_degree: int, num_powers: int):
    if hiding_poly_degree <= 0:
        raise SizeError("Hiding bound must be positive")
    if hiding_poly_degree >= num_powers:
        raise SizeError(f"Hiding bound {hiding_poly_degree} too large for {num_powers} powers of gamma_g")


def _commit_coefficients(bases, polynomial: DensePolynomial, group: PairingGroup) -> G1:
    num_leading_zeros, coeffs = skip_leading_zeros_and_convert(polynomial.coeffs, group)
    return multiexp_g1(bases[num_leading_zeros:num_leading_zeros + len(coeffs)], coeffs, group)


def commit(powers: Powers, polynomial: DensePolynomial, hiding_bound: int = None,
           rng=None) -> Tuple[KZGCommitment, Randomness]:
    """
    Commit to ``polynomial``.

    Parameters
    ----------
    powers : Powers
        The trimmed prover key
    polynomial : DensePolynomial
        The polynomial, of degree < powers.size()
    hiding_bound : int, optional
        Degree of the random blinding polynomial; None for a plain commitment
    rng : random.Random, optional
        Randomness source for the blinding polynomial (default: secrets.SystemRandom)

    Returns
    -------
    tuple
        (commitment, randomness); keep the randomness for open()
    """
    group = powers.group
    check_degree_is_too_large(polynomial.degree(), powers.size())

    element = _commit_coefficients(powers.powers_of_g, polynomial, group)

    randomness = Randomness.empty(polynomial.modulus)
    if hiding_bound is not None:
        check_hiding_bound(hiding_bound, len(powers.powers_of_gamma_g))
        blinding = DensePolynomial.rand(hiding_bound, polynomial.modulus, rng or secrets.SystemRandom())
        element *= multiexp_g1(powers.powers_of_gamma_g[:len(blinding.coeffs)], blinding.to_scalars(group), group)
        randomness = Randomness(blinding)

    logger.debug(f"Committed to polynomial of degree {polynomial.degree()} (hiding={randomness.is_hiding()})")
    return KZGCommitment(group, element), randomness


def compute_witness_polynomial(polynomial: DensePolynomial, point: int,
                               randomness: Randomness) -> Tuple[DensePolynomial, Optional[DensePolynomial]]:
    """
    Compute w(X) = (p(X) - p(z)) / (X - z) and, when hiding, the same quotient of r(X).

    Synthetic division of p by (X - z) leaves remainder p(z) and the quotient
    of the exact division of p(X) - p(z).
    """
    witness, _ = polynomial.divide_by_linear(point)
    hiding_witness = None
    if randomness.is_hiding():
        hiding_witness, _ = randomness.blinding_polynomial.divide_by_linear(point)
    return witness, hiding_witness


def open_with_witness_polynomial(powers: Powers, point: int, randomness: Randomness,
                                 witness_polynomial: DensePolynomial,
                                 hiding_witness_polynomial: Optional[DensePolynomial]) -> Proof:
    group = powers.group
    check_degree_is_too_large(witness_polynomial.degree(), powers.size())

    w = _commit_coefficients(powers.powers_of_g, witness_polynomial, group)

    random_v = None
    if hiding_witness_polynomial is not None:
        blinding_evaluation = randomness.blinding_polynomial.evaluate(point)
        hiding_coeffs = hiding_witness_polynomial.to_scalars(group)
        w *= multiexp_g1(powers.powers_of_gamma_g[:len(hiding_coeffs)], hiding_coeffs, group)
        random_v = scalar(group, blinding_evaluation)

    return Proof(w=w, random_v=random_v)


def open(powers: Powers, polynomial: DensePolynomial, point: ZR, randomness: Randomness) -> Proof:
    """
    On input a polynomial ``polynomial`` and a point ``point``, output an evaluation proof.

    Raises SizeError if the polynomial's degree exceeds the key's capacity.
    """
    check_degree_is_too_large(polynomial.degree(), powers.size())
    z = int(point) % polynomial.modulus

    logger.debug(f"Opening polynomial of degree {polynomial.degree()}")
    witness_polynomial, hiding_witness_polynomial = compute_witness_polynomial(polynomial, z, randomness)
    return open_with_witness_polynomial(powers, z, randomness, witness_polynomial, hiding_witness_polynomial)


def check(vk: KZGVerifierKey, commitment: KZGCommitment, point: ZR, value: ZR, proof: Proof) -> bool:
    """
    Verify that ``proof`` shows p(point) = value for the committed p.

    Formula:
    --------
    e(C · G^{-v} · (γG)^{-r(z)}, H) = e(π, H^β · H^{-z})

    Returns
    -------
    bool
        True if the equation holds, False otherwise
    """
    group = vk.group
    inner = div(commitment.element, vk.g ** value)
    if proof.random_v is not None:
        inner = div(inner, vk.gamma_g ** proof.random_v)
    lhs = pair(inner, vk.h)

    rhs = pair(proof.w, div(vk.beta_h, vk.h ** point))
    return gt_eq(lhs, rhs, group)
