"""
Test Suite for SRS Generation and Key Split
===========================================

Checks the structure of the structured reference string: the power
sequences, the hole, the anchor, and the prover/verifier split.
"""

import random

import pytest
from charm.toolbox.pairinggroup import G1, pair

from pointproofs.config import config
from pointproofs.errors import SizeError
from pointproofs.groups import get_generators
from pointproofs.keys import ProverKey, VerifierKey, split
from pointproofs.srs import generate_srs
from pointproofs.utils import serialize_element


@pytest.fixture(scope="module")
def small_srs(group):
    """Generate SRS for small vector dimension (n=8)."""
    return generate_srs(group, 8, random.Random(8))


def _as_bytes(elements, group):
    return [serialize_element(e, group) for e in elements]


# ============================================================================
# Structure
# ============================================================================

def test_sequence_lengths(small_srs):
    assert small_srs.dimension == 8
    assert len(small_srs.g) == 16
    assert len(small_srs.h) == 8
    assert small_srs.validate()


def test_hole_is_identity(small_srs, group):
    """The G1 slot for α^{N+1} is published as the identity."""
    n = small_srs.dimension
    assert small_srs.hole == n
    assert small_srs.g[n] == group.init(G1, 1)
    for i in range(2 * n):
        if i != n:
            assert not small_srs.g[i] == group.init(G1, 1)


def test_g_and_h_share_exponents(small_srs, group):
    """
    e(g[i], H) = e(G, h[i]) for every i < N: both sequences carry α^{i+1}.
    """
    G, H = get_generators(group)
    for i in range(small_srs.dimension):
        assert pair(small_srs.g[i], H) == pair(G, small_srs.h[i]), f"Exponent mismatch at index {i}"


def test_g_powers_are_consecutive(small_srs, group):
    """e(g[i+1], H) = e(g[i], h[0]) outside the hole: consecutive powers of α."""
    n = small_srs.dimension
    for i in range(2 * n - 1):
        if i + 1 == n or i == n:
            continue
        assert pair(small_srs.g[i + 1], small_srs.generator_h) == pair(small_srs.g[i], small_srs.h[0])


def test_anchor_matches_hole_exponent(small_srs):
    """
    t = e(G, H)^{α^{N+1}}, reachable from the published powers only through
    pairings that sum to N+1.
    """
    n = small_srs.dimension
    assert pair(small_srs.g[n - 1], small_srs.h[0]) == small_srs.t
    assert pair(small_srs.g[0], small_srs.h[n - 1]) == small_srs.t
    assert not pair(small_srs.g[n + 1], small_srs.generator_h) == small_srs.t


def test_dimension_one(group):
    srs = generate_srs(group, 1, random.Random(1))
    assert len(srs.g) == 2 and len(srs.h) == 1
    assert srs.g[1] == group.init(G1, 1)
    assert pair(srs.g[0], srs.h[0]) == srs.t


def test_invalid_dimension(group):
    with pytest.raises(SizeError):
        generate_srs(group, 0)


# ============================================================================
# Randomness and parallelism
# ============================================================================

def test_seeded_generation_is_deterministic(group):
    a = generate_srs(group, 4, random.Random(42))
    b = generate_srs(group, 4, random.Random(42))
    assert _as_bytes(a.g, group) == _as_bytes(b.g, group)
    assert _as_bytes(a.h, group) == _as_bytes(b.h, group)
    assert a.identifier == b.identifier


def test_different_seeds_give_different_srs(group):
    a = generate_srs(group, 4, random.Random(1))
    b = generate_srs(group, 4, random.Random(2))
    assert a.identifier != b.identifier


def test_parallel_generation_matches_serial(group, monkeypatch):
    serial = generate_srs(group, 6, random.Random(7))
    monkeypatch.setattr(config, 'workers', 4)
    parallel = generate_srs(group, 6, random.Random(7))
    assert _as_bytes(serial.g, group) == _as_bytes(parallel.g, group)
    assert _as_bytes(serial.h, group) == _as_bytes(parallel.h, group)
    assert serial.t == parallel.t


def test_rng_errors_propagate(group):
    class BrokenRng:
        def randrange(self, *args):
            raise OSError("entropy source unavailable")

    with pytest.raises(OSError):
        generate_srs(group, 4, BrokenRng())


# ============================================================================
# Key split
# ============================================================================

def test_split_projects_disjoint_views(small_srs):
    prover_key, verifier_key = split(small_srs)

    assert isinstance(prover_key, ProverKey)
    assert isinstance(verifier_key, VerifierKey)
    assert prover_key.g == small_srs.g
    assert verifier_key.h == small_srs.h
    assert verifier_key.t == small_srs.t
    assert not hasattr(prover_key, 'h') and not hasattr(prover_key, 't')
    assert not hasattr(verifier_key, 'g')
    assert prover_key.dimension == verifier_key.dimension == 8
    assert prover_key.srs_id == verifier_key.srs_id == small_srs.identifier


def test_keys_are_immutable(small_srs):
    prover_key, _ = split(small_srs)
    with pytest.raises(AttributeError):
        prover_key.dimension = 16
