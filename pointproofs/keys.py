"""
Prover and Verifier Keys
========================

The SRS is split into two disjoint views:
- ProverKey:   g (the G1 powers, including the hole)
- VerifierKey: h (the G2 powers), the anchor t and the generator H

Commit and open only ever see a ProverKey; verify only ever sees a
VerifierKey. Both carry the dimension N and the fingerprint of the SRS they
came from, which every operation checks before doing any arithmetic.
"""

from dataclasses import dataclass
from typing import Tuple

from charm.toolbox.pairinggroup import PairingGroup, G1, G2, GT

from .errors import SetupMismatchError
from .srs import StructuredReferenceString


@dataclass(frozen=True)
class ProverKey:
    group: PairingGroup
    dimension: int
    g: Tuple[G1, ...]
    srs_id: str

    @classmethod
    def from_srs(cls, srs: StructuredReferenceString) -> 'ProverKey':
        return cls(group=srs.group, dimension=srs.dimension, g=srs.g, srs_id=srs.identifier)


@dataclass(frozen=True)
class VerifierKey:
    group: PairingGroup
    dimension: int
    h: Tuple[G2, ...]
    t: GT
    generator_h: G2
    srs_id: str

    @classmethod
    def from_srs(cls, srs: StructuredReferenceString) -> 'VerifierKey':
        return cls(
            group=srs.group,
            dimension=srs.dimension,
            h=srs.h,
            t=srs.t,
            generator_h=srs.generator_h,
            srs_id=srs.identifier,
        )


def split(srs: StructuredReferenceString) -> Tuple[ProverKey, VerifierKey]:
    """
    Derive the (ProverKey, VerifierKey) pair from an SRS.

    Pure projection, no validation beyond the SRS being well-formed.
    """
    return ProverKey.from_srs(srs), VerifierKey.from_srs(srs)


def check_compatible(dimension: int, srs_id: str, other_dimension: int, other_srs_id: str, what: str):
    """Raise SetupMismatchError unless both sides come from the same parameter set."""
    if dimension != other_dimension:
        raise SetupMismatchError(f"{what}: dimension {other_dimension} != {dimension}")
    if srs_id != other_srs_id:
        raise SetupMismatchError(f"{what}: derived from a different SRS")
