"""
Dense Univariate Polynomials over Z_p
=====================================

Coefficients are canonical Python integers in [0, p) held in a numpy object
array, lowest degree first: coeffs[i] is the coefficient of X^i. Trailing
(high-degree) zeros are trimmed, so the zero polynomial has no coefficients.
"""

from typing import List, Sequence, Tuple

import numpy as np
from charm.toolbox.pairinggroup import PairingGroup, ZR

from .utils import convert_to_scalars


class DensePolynomial:
    """A polynomial ∑ c_i X^i with coefficients in Z_p."""

    def __init__(self, coeffs: Sequence[int], modulus: int):
        self.modulus = int(modulus)
        arr = np.array([int(c) % self.modulus for c in coeffs], dtype=object)
        self.coeffs = np.trim_zeros(arr, 'b') if len(arr) else arr

    @classmethod
    def zero(cls, modulus: int) -> 'DensePolynomial':
        return cls([], modulus)

    @classmethod
    def from_scalars(cls, scalars: Sequence[ZR], group: PairingGroup) -> 'DensePolynomial':
        p = int(group.order())
        return cls([int(s) % p for s in scalars], p)

    @classmethod
    def rand(cls, degree: int, modulus: int, rng) -> 'DensePolynomial':
        """
        Sample a polynomial of exactly ``degree`` (the leading coefficient is non-zero).

        ``rng`` must expose ``randrange`` (random.Random, secrets.SystemRandom).
        """
        if degree < 0:
            raise ValueError(f"degree must be non-negative, got {degree}")
        coeffs = [rng.randrange(0, modulus) for _ in range(degree)]
        coeffs.append(rng.randrange(1, modulus))
        return cls(coeffs, modulus)

    def degree(self) -> int:
        """Degree of the polynomial; the zero polynomial has degree 0."""
        return max(len(self.coeffs) - 1, 0)

    def is_zero(self) -> bool:
        return len(self.coeffs) == 0

    def evaluate(self, point: int) -> int:
        """Evaluate at ``point`` with Horner's rule."""
        point = int(point) % self.modulus
        result = 0
        for c in reversed(self.coeffs):
            result = (result * point + int(c)) % self.modulus
        return result

    def to_scalars(self, group: PairingGroup) -> List[ZR]:
        return convert_to_scalars(self.coeffs, group)

    def _check_modulus(self, other: 'DensePolynomial'):
        if self.modulus != other.modulus:
            raise ValueError(f"Polynomials over different fields: {self.modulus} != {other.modulus}")

    def _padded(self, length: int) -> np.ndarray:
        out = np.zeros(length, dtype=object)
        out[:len(self.coeffs)] = self.coeffs
        return out

    def __add__(self, other: 'DensePolynomial') -> 'DensePolynomial':
        self._check_modulus(other)
        length = max(len(self.coeffs), len(other.coeffs))
        return DensePolynomial(self._padded(length) + other._padded(length), self.modulus)

    def __sub__(self, other: 'DensePolynomial') -> 'DensePolynomial':
        self._check_modulus(other)
        length = max(len(self.coeffs), len(other.coeffs))
        return DensePolynomial(self._padded(length) - other._padded(length), self.modulus)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DensePolynomial):
            return NotImplemented
        return self.modulus == other.modulus and list(self.coeffs) == list(other.coeffs)

    def __repr__(self) -> str:
        return f"DensePolynomial(degree={self.degree()}, coeffs={list(self.coeffs)})"

    def divide_by_linear(self, point: int) -> Tuple['DensePolynomial', int]:
        """
        Divide by (X - point) with synthetic division.

        Returns
        -------
        tuple
            (quotient, remainder) with self = quotient · (X - point) + remainder;
            the remainder equals self.evaluate(point)
        """
        p = self.modulus
        point = int(point) % p
        if len(self.coeffs) == 0:
            return DensePolynomial.zero(p), 0

        quotient = np.zeros(len(self.coeffs) - 1, dtype=object)
        carry = 0
        # Walk from the highest degree down
        for i in range(len(self.coeffs) - 1, 0, -1):
            carry = (int(self.coeffs[i]) + carry * point) % p
            quotient[i - 1] = carry
        remainder = (int(self.coeffs[0]) + carry * point) % p
        return DensePolynomial(quotient, p), remainder
