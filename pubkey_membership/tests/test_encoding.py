import pytest

from pubkey_membership.curve import WeierstrassPoint
from pubkey_membership.encoding import (
    hex_to_int,
    int_to_hex,
    public_key_from_hex,
    public_key_to_hex,
)
from pubkey_membership.exceptions import InputError, InvalidEncodingError
from pubkey_membership.test_vectors import ecdsa_vectors as vectors

SIGNER_HEX = vectors.RECOVERY_CANDIDATES[vectors.RECOVERY_INDEX]


@pytest.mark.parametrize(
    "value, expected",
    [("1f", 31), ("0x1F", 31), ("0X00ff", 255), ("00", 0)],
)
def test_hex_to_int(value, expected):
    assert hex_to_int(value) == expected


@pytest.mark.parametrize("value", ["", "0x", "xyz", "12 34", "-1"])
def test_hex_to_int_rejects_non_hex(value):
    with pytest.raises(InvalidEncodingError):
        hex_to_int(value)


def test_hex_to_int_rejects_non_string():
    with pytest.raises(InvalidEncodingError, match="Expected hex string"):
        hex_to_int(31)


def test_int_to_hex_pads_to_field_width():
    assert int_to_hex(1) == "00" * 31 + "01"
    assert int_to_hex(0xABCD, length=2) == "abcd"


def test_int_to_hex_rejects_unencodable_values():
    with pytest.raises(InvalidEncodingError):
        int_to_hex(-1)
    with pytest.raises(InvalidEncodingError, match="does not fit"):
        int_to_hex(1 << 256)


def test_public_key_from_hex(signer_public_key):
    assert public_key_from_hex(SIGNER_HEX) == signer_public_key
    assert public_key_from_hex("0x" + SIGNER_HEX) == signer_public_key
    assert public_key_from_hex(SIGNER_HEX.upper()) == signer_public_key


def test_public_key_to_hex(signer_public_key):
    assert public_key_to_hex(signer_public_key) == SIGNER_HEX


def test_public_key_wrong_length():
    with pytest.raises(InvalidEncodingError, match="130 hex chars"):
        public_key_from_hex(SIGNER_HEX[:-2])


def test_public_key_wrong_prefix():
    with pytest.raises(InvalidEncodingError, match="must start with"):
        public_key_from_hex("02" + SIGNER_HEX[2:])


def test_public_key_non_hex_body():
    with pytest.raises(InvalidEncodingError):
        public_key_from_hex("04" + "zz" + SIGNER_HEX[4:])


@pytest.mark.parametrize("index", [0, 1, 3])
def test_public_key_off_curve(index):
    # Only the signer's entry in the recovery list is a curve point
    with pytest.raises(InvalidEncodingError, match="not a curve point"):
        public_key_from_hex(vectors.RECOVERY_CANDIDATES[index])


def test_encoding_errors_are_input_errors():
    with pytest.raises(InputError):
        public_key_from_hex("04")


def test_identity_has_no_encoding():
    with pytest.raises(InvalidEncodingError):
        public_key_to_hex(WeierstrassPoint.identity())
