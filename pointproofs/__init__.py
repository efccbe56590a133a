"""
Pointproofs and KZG Commitments
===============================

Pairing-based commitment schemes built on charm-crypto with Type-3
asymmetric pairing curves:

- a vector commitment committing to up to N scalars with one G1 element and
  opening any single position with one G1 element (pointproofs);
- a KZG polynomial commitment proving single evaluations, optionally hiding.

Modules:
--------
- groups: Group initialization, fixed generators, scalar sampling
- srs: Structured Reference String generation (powers of α with a hole)
- keys: Prover/verifier key split
- vc: Vector commit, open, verify
- polynomial: Dense polynomials over Z_p
- kzg: KZG setup, trim, commit, open, check
- utils: Multi-exponentiation, pairing products, batch preparation, serialization
- config: Environment-driven settings

Usage:
------
    from charm.toolbox.pairinggroup import ZR
    from pointproofs import setup, generate_srs, split, vc

    params = setup('MNT224')
    group = params['group']
    srs = generate_srs(group, 16)
    prover_key, verifier_key = split(srs)

    m = [group.random(ZR) for _ in range(16)]
    C = vc.commit(prover_key, m)
    pi = vc.prove_point_open(prover_key, m, 3)
    assert vc.verify(C, verifier_key, m[3], 3, pi)
"""

__version__ = "0.1.0"

from . import kzg, vc
from .errors import DomainError, PointproofsError, SetupMismatchError, SizeError
from .groups import setup
from .keys import ProverKey, VerifierKey, split
from .polynomial import DensePolynomial
from .srs import StructuredReferenceString, generate_srs

__all__ = [
    'setup', 'generate_srs', 'split', 'vc', 'kzg',
    'StructuredReferenceString', 'ProverKey', 'VerifierKey', 'DensePolynomial',
    'PointproofsError', 'SizeError', 'DomainError', 'SetupMismatchError',
]
