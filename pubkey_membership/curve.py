"""
Baby Jubjub points in short-Weierstrass and twisted-Edwards form.

Both forms describe the same group. ECDSA runs on the Weierstrass form while
the membership circuit consumes Edwards coordinates, so every point type can
be converted to the other through the birational map below.

Points are immutable; arithmetic always returns a new point. Scalar
multiplication reduces the scalar mod the subgroup order and walks a fixed
number of ladder steps, so it is only meaningful for points of the prime
order subgroup.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, TypeVar

from .config import (
    EDWARDS_A,
    EDWARDS_D,
    FIELD_MODULUS,
    GENERATOR_EDWARDS,
    MONTGOMERY_A,
    SUBGROUP_ORDER_BITS,
    WEIERSTRASS_A,
    WEIERSTRASS_B,
)
from .exceptions import DivisionByZeroError, InvalidPointError
from .field import field_div, field_element, reduce_scalar

P = TypeVar("P", bound="CurvePoint")

# u-coordinate offset between Montgomery and Weierstrass form (A/3B, B = 1)
_MONTGOMERY_SHIFT = field_div(MONTGOMERY_A, 3)


def _check_coordinate(value: int, label: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidPointError(f"{label} must be an int, got {type(value).__name__}")
    if not 0 <= value < FIELD_MODULUS:
        raise InvalidPointError(f"{label} is outside the base field")
    return value


class CurvePoint(ABC):
    """Group operations shared by both curve forms."""

    @classmethod
    @abstractmethod
    def identity(cls: type[P]) -> P:
        ...

    @property
    @abstractmethod
    def is_identity(self) -> bool:
        ...

    @abstractmethod
    def add(self: P, other: P) -> P:
        ...

    @abstractmethod
    def negate(self: P) -> P:
        ...

    @abstractmethod
    def to_edwards(self) -> "EdwardsPoint":
        ...

    @abstractmethod
    def to_weierstrass(self) -> "WeierstrassPoint":
        ...

    def double(self: P) -> P:
        return self.add(self)

    def scalar_multiply(self: P, scalar: int) -> P:
        """
        Multiply by ``scalar mod n`` with a Montgomery ladder.

        The ladder always runs over the bit length of the subgroup order and
        performs one addition and one doubling per step, whatever the scalar.
        """
        k = reduce_scalar(scalar)
        r0 = self.identity()
        r1 = self
        for i in reversed(range(SUBGROUP_ORDER_BITS)):
            if (k >> i) & 1:
                r0, r1 = r0.add(r1), r1.double()
            else:
                r0, r1 = r0.double(), r0.add(r1)
        return r0

    def equals(self, other: "CurvePoint") -> bool:
        """Coordinate equality after moving ``other`` into this form."""
        if isinstance(other, type(self)):
            return self == other
        if isinstance(self, WeierstrassPoint):
            return self == other.to_weierstrass()
        return self == other.to_edwards()

    def __add__(self: P, other: P) -> P:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.add(other)

    def __sub__(self: P, other: P) -> P:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.add(other.negate())

    def __neg__(self: P) -> P:
        return self.negate()

    def __rmul__(self: P, scalar: int) -> P:
        if not isinstance(scalar, int):
            return NotImplemented
        return self.scalar_multiply(scalar)

    __mul__ = __rmul__


@dataclass(frozen=True)
class WeierstrassPoint(CurvePoint):
    """
    Affine point on y^2 = x^3 + A*x + B.

    The point at infinity is represented by ``x = y = None``.
    """

    x: Optional[int]
    y: Optional[int]

    def __post_init__(self):
        if self.x is None and self.y is None:
            return
        if self.x is None or self.y is None:
            raise InvalidPointError("Both coordinates must be set or both None")
        _check_coordinate(self.x, "x")
        _check_coordinate(self.y, "y")
        if not self.is_on_curve():
            raise InvalidPointError(
                f"Point ({self.x}, {self.y}) is not on the Weierstrass curve"
            )

    @classmethod
    def identity(cls) -> "WeierstrassPoint":
        return cls(None, None)

    @property
    def is_identity(self) -> bool:
        return self.x is None

    def is_on_curve(self) -> bool:
        if self.is_identity:
            return True
        x = field_element(self.x)
        y = field_element(self.y)
        return y * y == x * x * x + x * WEIERSTRASS_A + WEIERSTRASS_B

    def add(self, other: "WeierstrassPoint") -> "WeierstrassPoint":
        if self.is_identity:
            return other
        if other.is_identity:
            return self

        x1, y1 = field_element(self.x), field_element(self.y)
        x2, y2 = field_element(other.x), field_element(other.y)

        if x1 == x2:
            if y1 + y2 == 0:
                return self.identity()
            slope = field_div(x1 * x1 * 3 + WEIERSTRASS_A, y1 * 2)
        else:
            slope = field_div(y2 - y1, x2 - x1)

        x3 = slope * slope - x1 - x2
        y3 = slope * (x1 - x3) - y1
        return WeierstrassPoint(x3.n, y3.n)

    def negate(self) -> "WeierstrassPoint":
        if self.is_identity:
            return self
        return WeierstrassPoint(self.x, (-field_element(self.y)).n)

    def to_edwards(self) -> "EdwardsPoint":
        """
        Map to twisted-Edwards form.

        Infinity maps to the Edwards neutral element (0, 1) and the
        2-torsion point (A/3, 0) maps to (0, -1).

        Raises:
            InvalidPointError: If the point lies outside the map's domain
        """
        if self.is_identity:
            return EdwardsPoint.identity()

        u = field_element(self.x) - _MONTGOMERY_SHIFT
        v = field_element(self.y)
        if v == 0:
            if u == 0:
                return EdwardsPoint(0, FIELD_MODULUS - 1)
            raise InvalidPointError(f"{self} is outside the Edwards map domain")

        try:
            x = field_div(u, v)
            y = field_div(u - 1, u + 1)
        except DivisionByZeroError as exc:
            raise InvalidPointError(
                f"{self} is outside the Edwards map domain"
            ) from exc
        return EdwardsPoint(x.n, y.n)

    def to_weierstrass(self) -> "WeierstrassPoint":
        return self


@dataclass(frozen=True)
class EdwardsPoint(CurvePoint):
    """Affine point on a*x^2 + y^2 = 1 + d*x^2*y^2. Neutral element is (0, 1)."""

    x: int
    y: int

    def __post_init__(self):
        _check_coordinate(self.x, "x")
        _check_coordinate(self.y, "y")
        if not self.is_on_curve():
            raise InvalidPointError(
                f"Point ({self.x}, {self.y}) is not on the Edwards curve"
            )

    @classmethod
    def identity(cls) -> "EdwardsPoint":
        return cls(0, 1)

    @property
    def is_identity(self) -> bool:
        return self.x == 0 and self.y == 1

    def is_on_curve(self) -> bool:
        x2 = field_element(self.x) ** 2
        y2 = field_element(self.y) ** 2
        return x2 * EDWARDS_A + y2 == x2 * y2 * EDWARDS_D + 1

    def add(self, other: "EdwardsPoint") -> "EdwardsPoint":
        # Unified addition; d is a non-square so the denominators never vanish
        x1, y1 = field_element(self.x), field_element(self.y)
        x2, y2 = field_element(other.x), field_element(other.y)
        t = x1 * x2 * y1 * y2 * EDWARDS_D
        x3 = field_div(x1 * y2 + y1 * x2, t + 1)
        y3 = field_div(y1 * y2 - x1 * x2 * EDWARDS_A, -t + 1)
        return EdwardsPoint(x3.n, y3.n)

    def negate(self) -> "EdwardsPoint":
        return EdwardsPoint((-field_element(self.x)).n, self.y)

    def to_edwards(self) -> "EdwardsPoint":
        return self

    def to_weierstrass(self) -> WeierstrassPoint:
        """
        Map to short-Weierstrass form.

        (0, 1) maps to infinity and (0, -1) to the 2-torsion point (A/3, 0).

        Raises:
            InvalidPointError: If the point lies outside the map's domain
        """
        x = field_element(self.x)
        y = field_element(self.y)
        if x == 0:
            if y == 1:
                return WeierstrassPoint.identity()
            if y == FIELD_MODULUS - 1:
                return WeierstrassPoint(_MONTGOMERY_SHIFT.n, 0)

        try:
            u = field_div(y + 1, -y + 1)
            v = field_div(u, x)
        except DivisionByZeroError as exc:
            raise InvalidPointError(
                f"{self} is outside the Weierstrass map domain"
            ) from exc
        return WeierstrassPoint((u + _MONTGOMERY_SHIFT).n, v.n)


def to_edwards(point: CurvePoint) -> EdwardsPoint:
    return point.to_edwards()


def to_weierstrass(point: CurvePoint) -> WeierstrassPoint:
    return point.to_weierstrass()


BASE_POINT_EDWARDS = EdwardsPoint(*GENERATOR_EDWARDS)
GENERATOR = BASE_POINT_EDWARDS.to_weierstrass()
