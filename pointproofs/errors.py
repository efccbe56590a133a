"""
Error Types
===========

All boundary checks raise subclasses of ValueError, so callers that already
catch ValueError keep working.

- SizeError: vector or polynomial too large, position out of range,
  invalid dimension, degree or hiding bound, or an encoded element that is
  not a G1 point
- DomainError: a value with no multiplicative inverse (the field zero)
  used where one is required
- SetupMismatchError: keys, commitments or witnesses from parameter sets of
  different dimension or from different setups combined

Cryptographically wrong proofs are never errors: verification returns False.
"""


class PointproofsError(Exception):
    """Base class for pointproofs errors."""


class SizeError(PointproofsError, ValueError):
    pass


class DomainError(PointproofsError, ValueError):
    pass


class SetupMismatchError(PointproofsError, ValueError):
    pass
