"""
Utility Functions
=================

This module provides utility functions for group operations, multi-exponentiation,
pairing operations, scalar conversion and serialization.

Key Operations:
- Multi-exponentiation (MSM): Compute ∏ g_i^{e_i}
- Pairing products: Compute ∏ e(g_i, ĝ_i)
- Division: multiplication by the inverse in G1, G2 or GT
- Batch preparation of freshly generated bases
- Scalar conversion with leading-zero skipping
- Serialization: Convert group elements to/from bytes

According to charm-crypto documentation:
- Group operations use * for multiplication, ** for exponentiation
- Inverse is computed as elem ** -1
- Pairing is computed as pair(g1_elem, g2_elem)
- Serialization uses objectToBytes() and bytesToObject()
"""

import functools
import hashlib
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Sequence, Tuple, Union

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1, G2, GT, pair
from charm.core.engine.util import objectToBytes, bytesToObject

from .config import config

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=None)
def _executor(workers: int) -> ThreadPoolExecutor:
    return ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pointproofs")


def parallel_map(fn: Callable, items: Iterable, workers: int = None) -> list:
    """
    Apply ``fn`` to every item and return the results in input order.

    With more than one worker the calls are spread over a thread pool that is
    created once per worker count and shared by later calls.
    ``Executor.map`` yields results by position, so the output is the same
    for any worker count.
    """
    if workers is None:
        workers = config.workers
    items = list(items)
    if workers <= 1 or len(items) <= 1:
        return [fn(item) for item in items]
    return list(_executor(workers).map(fn, items))


def prepare_batch(elements: Iterable) -> tuple:
    """
    Freeze a freshly generated sequence of bases into its storage form.

    Each element gets charm's fixed-base precomputation table (``initPP``),
    which speeds up every later exponentiation with that base. This is done
    once, over the whole sequence, right after a generation pass.

    Returns
    -------
    tuple
        The prepared elements, in order
    """
    elements = tuple(elements)
    if config.precompute:
        for elem in elements:
            elem.initPP()
    return elements


def multiexp(bases: Sequence, exponents: Sequence[ZR], identity) -> Union[G1, G2]:
    """
    Compute multi-exponentiation: ∏ bases[i]^{exponents[i]}.

    Formula:
    --------
    result = ∏_{i=0}^{len(bases)-1} bases[i]^{exponents[i]}

    Parameters
    ----------
    bases : Sequence[G1] or Sequence[G2]
        Base elements
    exponents : Sequence[ZR]
        Exponents in Z_p
    identity : G1 or G2
        The identity of the bases' group, returned for empty input

    Notes
    -----
    - bases and exponents must have the same length
    - The per-term exponentiations go through parallel_map; the product is
      then taken in index order
    """
    if len(bases) != len(exponents):
        raise ValueError(f"bases and exponents must have same length: {len(bases)} != {len(exponents)}")

    terms = parallel_map(lambda term: term[0] ** term[1], zip(bases, exponents))
    result = identity
    for term in terms:
        result *= term
    return result


def multiexp_g1(bases: Sequence[G1], exponents: Sequence[ZR], group: PairingGroup) -> G1:
    """
    Compute multi-exponentiation in G1: ∏ bases[i]^{exponents[i]}.

    If bases is empty, returns the identity element 1_G.

    Examples
    --------
    >>> result = multiexp_g1([g1, g2, g3], [e1, e2, e3], group)
    >>> # Equivalent to: g1^e1 * g2^e2 * g3^e3
    """
    return multiexp(bases, exponents, group.init(G1, 1))


def multiexp_g2(bases: Sequence[G2], exponents: Sequence[ZR], group: PairingGroup) -> G2:
    """Compute multi-exponentiation in G2: ∏ bases[i]^{exponents[i]}."""
    return multiexp(bases, exponents, group.init(G2, 1))


def pair_prod(g1_elems: List[G1], g2_elems: List[G2], group: PairingGroup) -> GT:
    """
    Compute product of pairings: ∏ e(g1_elems[i], g2_elems[i]).

    Parameters
    ----------
    g1_elems : List[G1]
        List of G1 elements
    g2_elems : List[G2]
        List of G2 elements
    group : PairingGroup
        The pairing group

    Returns
    -------
    GT
        The product of pairings ∏ e(g1_elems[i], g2_elems[i])

    Notes
    -----
    - If lists are empty, returns the identity element 1_GT
    - g1_elems and g2_elems must have the same length

    Examples
    --------
    >>> result = pair_prod([g1, g2], [g_hat1, g_hat2], group)
    >>> # Equivalent to: e(g1, g_hat1) * e(g2, g_hat2)
    """
    if len(g1_elems) != len(g2_elems):
        raise ValueError(f"g1_elems and g2_elems must have same length: {len(g1_elems)} != {len(g2_elems)}")

    result = group.init(GT, 1)
    for g1, g2 in zip(g1_elems, g2_elems):
        result *= pair(g1, g2)

    return result


def div(numerator, denominator):
    """
    Compute division in G1, G2 or GT: numerator / denominator.

    This is implemented as: numerator * denominator^{-1}
    """
    return numerator * (denominator ** -1)


def gt_eq(a: GT, b: GT, group: PairingGroup) -> bool:
    """Test equality of two GT elements."""
    return a == b


def skip_leading_zeros_and_convert(coeffs: Sequence[int], group: PairingGroup) -> Tuple[int, List[ZR]]:
    """
    Drop the zero low-order coefficients and convert the rest to scalars.

    Returns
    -------
    tuple
        (num_leading_zeros, scalars) where scalars[k] is the coefficient of
        X^{num_leading_zeros + k}. The caller offsets into its bases by
        num_leading_zeros.
    """
    num_leading_zeros = 0
    while num_leading_zeros < len(coeffs) and int(coeffs[num_leading_zeros]) == 0:
        num_leading_zeros += 1
    return num_leading_zeros, convert_to_scalars(coeffs[num_leading_zeros:], group)


def convert_to_scalars(coeffs: Sequence[int], group: PairingGroup) -> List[ZR]:
    """Convert canonical integer coefficients in [0, p) to ZR exponents."""
    return [group.init(ZR, int(c)) for c in coeffs]


def serialize_element(elem: Union[G1, G2, GT, ZR], group: PairingGroup) -> bytes:
    """
    Serialize a group element to bytes.

    According to charm-crypto documentation:
    Use objectToBytes(obj, group) to serialize group elements.
    """
    return objectToBytes(elem, group)


def deserialize_element(data: bytes, group: PairingGroup) -> Union[G1, G2, GT, ZR]:
    """
    Deserialize a group element from bytes.

    According to charm-crypto documentation:
    Use bytesToObject(bytes, group) to deserialize group elements.
    """
    return bytesToObject(data, group)


def fingerprint(elem: Union[G1, G2, GT], group: PairingGroup) -> str:
    """SHA-256 hex digest of an element's canonical serialization."""
    return hashlib.sha256(serialize_element(elem, group)).hexdigest()
