"""
Custom exceptions for public-key membership proofs.

These exceptions provide structured error handling for curve arithmetic,
ECDSA checks, Merkle construction and the external proving backend.
"""


class PubkeyMembershipError(Exception):
    """Base exception for pubkey membership errors."""

    pass


class CryptographicError(PubkeyMembershipError):
    """Cryptographic operation error."""

    pass


class InputError(PubkeyMembershipError):
    """Caller supplied an unusable input."""

    pass


class DivisionByZeroError(CryptographicError, ZeroDivisionError):
    """Modular inverse of zero."""

    pass


class InvalidPointError(CryptographicError):
    """Coordinates are off-curve or outside a conversion's domain."""

    pass


class MalformedSignatureError(CryptographicError):
    """Signature component r or s is outside [1, n-1]."""

    pass


class InvalidSignatureError(CryptographicError):
    """Well-formed signature that fails mandatory verification."""

    pass


class KeyNotFoundError(CryptographicError):
    """No candidate public key verifies the signature."""

    pass


class InvalidEncodingError(InputError):
    """Malformed hex or public-key encoding."""

    pass


class IndexOutOfRangeError(InputError, IndexError):
    """Leaf index outside the public key list."""

    pass


class TooManyLeavesError(InputError):
    """More leaves than the fixed-depth tree can hold."""

    pass


class ConfigurationError(PubkeyMembershipError):
    """Configuration error."""

    pass


class ArtifactNotFoundError(ConfigurationError):
    """Circuit artifact could not be located or fetched."""

    pass


class ProofGenerationError(PubkeyMembershipError):
    """Error during proof generation."""

    pass


class SerializationError(PubkeyMembershipError):
    """Proof could not be encoded or decoded."""

    pass
