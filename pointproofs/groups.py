"""
Group Initialization and Setup
===============================

This module binds the commitment schemes to charm-crypto's Type-3 asymmetric
pairing groups.

According to charm-crypto documentation (https://jhuisi.github.io/charm/tutorial.html):
- PairingGroup('MNT224') provides asymmetric Type-3 pairings with 224-bit base field
- Alternative curves: 'BN254', 'SS512' (symmetric, but can be used)
- G1, G2 are the source groups; GT is the target group
- Pairing operation: pair(g1_elem, g2_elem) -> GT element
"""

import logging

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1, G2, GT, pair

from .config import config

logger = logging.getLogger(__name__)

# Domain tags for the fixed generators G and H
GENERATOR_G_TAG = "pointproofs-generator-G"
GENERATOR_H_TAG = "pointproofs-generator-H"


def setup(group_name: str = None) -> dict:
    """
    Initialize the pairing group used by both commitment schemes.

    Parameters
    ----------
    group_name : str, optional
        The pairing curve identifier. Defaults to ``config.curve``
        (``POINTPROOFS_CURVE``, 'MNT224' unless overridden).

    Returns
    -------
    dict
        A dictionary containing:
        - 'group': The PairingGroup object
        - 'group_name': The name of the curve used
        - 'G1', 'G2', 'GT', 'ZR': The charm group type constants
        - 'pair': The pairing function

    Notes
    -----
    If the requested curve is not available in the local charm build, BN254
    and then SS512 are tried, with a warning logged for each fallback.

    Examples
    --------
    >>> params = setup('MNT224')
    >>> group = params['group']
    """
    if group_name is None:
        group_name = config.curve

    try:
        group = PairingGroup(group_name)
    except Exception as e:
        logger.warning(f"{group_name} not available ({e}), falling back to BN254")
        try:
            group = PairingGroup('BN254')
            group_name = 'BN254'
        except Exception as e2:
            logger.warning(f"BN254 not available ({e2}), falling back to SS512")
            group = PairingGroup('SS512')
            group_name = 'SS512'

    logger.debug(f"Initialized pairing group {group_name}")
    return {
        'group': group,
        'group_name': group_name,
        'G1': G1,
        'G2': G2,
        'GT': GT,
        'ZR': ZR,
        'pair': pair,
    }


def get_generators(group: PairingGroup) -> tuple:
    """
    Return the fixed generators (G, H) of the two source groups.

    Unlike a random choice, the generators are derived by hashing fixed
    domain tags into G1 and G2, so every parameter set built over the same
    curve shares them and seeded setups are reproducible.

    Returns
    -------
    tuple
        (G, H) with G in G1 and H in G2
    """
    return group.hash(GENERATOR_G_TAG, G1), group.hash(GENERATOR_H_TAG, G2)


def random_scalar(group: PairingGroup, rng=None) -> ZR:
    """
    Sample a uniformly random non-zero scalar.

    Parameters
    ----------
    group : PairingGroup
        The pairing group
    rng : random.Random, optional
        Caller-supplied randomness source exposing ``randrange``. When None,
        charm's internal RNG is used. Errors raised by ``rng`` propagate.
    """
    if rng is None:
        return group.random(ZR)
    return group.init(ZR, rng.randrange(1, int(group.order())))


def zero(group: PairingGroup) -> ZR:
    return group.init(ZR, 0)


def one(group: PairingGroup) -> ZR:
    return group.init(ZR, 1)


def scalar(group: PairingGroup, value: int) -> ZR:
    """Map a Python integer into the scalar field (reduced mod the group order)."""
    return group.init(ZR, int(value) % int(group.order()))
