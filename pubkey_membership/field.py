"""
Modular arithmetic over the curve base field and the subgroup order.

Base-field elements are ``py_ecc`` prime-field elements with the Baby Jubjub
modulus. Scalars modulo the subgroup order stay plain ints.
"""

from __future__ import annotations

from py_ecc.fields.field_elements import FQ
from py_ecc.utils import prime_field_inv

from .config import FIELD_MODULUS, SUBGROUP_ORDER
from .exceptions import DivisionByZeroError


class BabyJubjubFQ(FQ):
    """Element of the Baby Jubjub base field (the BN254 scalar field)."""

    field_modulus = FIELD_MODULUS


def field_element(value: int | FQ) -> BabyJubjubFQ:
    return BabyJubjubFQ(value)


def field_div(numerator: int | FQ, denominator: int | FQ) -> BabyJubjubFQ:
    """
    Divide two base-field elements.

    ``FQ`` maps the inverse of zero to zero, which would silently corrupt
    point arithmetic, so the denominator is checked first.

    Raises:
        DivisionByZeroError: If ``denominator`` is zero mod p
    """
    denominator = field_element(denominator)
    if denominator == 0:
        raise DivisionByZeroError("Division by zero in base field")
    return field_element(numerator) / denominator


def inverse_mod(value: int, modulus: int) -> int:
    """
    Extended-Euclid modular inverse.

    Args:
        value: Integer to invert (reduced mod ``modulus`` first)
        modulus: Prime modulus

    Returns:
        ``value^-1 mod modulus``

    Raises:
        DivisionByZeroError: If ``value`` is zero mod ``modulus``
    """
    reduced = value % modulus
    if reduced == 0:
        raise DivisionByZeroError(f"No inverse of zero modulo {modulus}")
    return prime_field_inv(reduced, modulus)


def scalar_inverse(value: int) -> int:
    return inverse_mod(value, SUBGROUP_ORDER)


def reduce_scalar(value: int) -> int:
    return value % SUBGROUP_ORDER
