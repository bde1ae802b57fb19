"""
Curve, tree and circuit configuration for public-key membership proofs.

Baby Jubjub is defined over the BN254 scalar field, so its base-field
elements are native field elements of the groth16 circuit.
"""

# ============================================================================
# CURVE SELECTION
# ============================================================================

CURVE_NAME = "babyjubjub"

# Base field prime (BN254 scalar field)
FIELD_MODULUS = (
    21888242871839275222246405745257275088548364400416034343698204186575808495617
)

# Prime order of the subgroup generated by Base8
SUBGROUP_ORDER = (
    2736030358979909402780800718157159386076813972158567259200215660948447373041
)
SUBGROUP_ORDER_BITS = SUBGROUP_ORDER.bit_length()
COFACTOR = 8

# ============================================================================
# CURVE FORMS
# ============================================================================

# Twisted Edwards: a*x^2 + y^2 = 1 + d*x^2*y^2
EDWARDS_A = 168700
EDWARDS_D = 168696

# Montgomery: B*v^2 = u^3 + A*u^2 + u
MONTGOMERY_A = 168698
MONTGOMERY_B = 1

# Short Weierstrass: y^2 = x^3 + A*x + B
WEIERSTRASS_A = (
    7296080957279758407415468581752425029516121466805344781232734728849116493472
)
WEIERSTRASS_B = (
    16213513238399463127589930181672055621146936592900766180517188641980520820846
)

# circomlib Base8 in Edwards coordinates
GENERATOR_EDWARDS = (
    5299619240641551281634865583518297030282874472190772894086521144482721001553,
    16950150798460657717958625567821834550301663161624707787222815936182638968203,
)

# ============================================================================
# ENCODING
# ============================================================================

FIELD_ELEMENT_BYTES = 32
PUBLIC_KEY_PREFIX = "04"
PUBLIC_KEY_HEX_LENGTH = len(PUBLIC_KEY_PREFIX) + 4 * FIELD_ELEMENT_BYTES

# ============================================================================
# MERKLE TREE (shared with the circuit)
# ============================================================================

MERKLE_TREE_DEPTH = 8
MERKLE_TREE_ZERO_VALUE = 0
MERKLE_TREE_ARITY = 2

DOMAIN_SEPARATOR_PREFIX = b"PUBKEY_MEMBERSHIP_V1_"
DOMAIN_SEPARATORS = {
    "merkle_leaf": DOMAIN_SEPARATOR_PREFIX + b"MERKLE_LEAF",
    "merkle_node": DOMAIN_SEPARATOR_PREFIX + b"MERKLE_NODE",
}

# ============================================================================
# CIRCUIT ARTIFACTS
# ============================================================================

CIRCUIT_NAME = "pubkey_membership"
CIRCUIT_WASM_FILE = f"{CIRCUIT_NAME}.wasm"
CIRCUIT_ZKEY_FILE = f"{CIRCUIT_NAME}.zkey"
CIRCUIT_VKEY_FILE = f"{CIRCUIT_NAME}_vkey.json"
DEFAULT_REMOTE_BASE_URL = "https://storage.googleapis.com/jubmoji-circuits/"

SNARKJS_BINARY = "snarkjs"
PROVER_TIMEOUT_SECONDS = 300
VERIFIER_TIMEOUT_SECONDS = 60
DOWNLOAD_TIMEOUT_SECONDS = 120

PROOF_VERSION = 1

# ============================================================================
# VALIDATION
# ============================================================================


def validate_config() -> bool:
    """
    Validate configuration parameters.

    Returns:
        True if configuration is valid

    Raises:
        AssertionError: If configuration is invalid
    """
    p = FIELD_MODULUS
    assert CURVE_NAME == "babyjubjub", "Invalid curve"
    assert SUBGROUP_ORDER * COFACTOR < 2 * p, "Subgroup order exceeds Hasse bound"
    assert (EDWARDS_A - EDWARDS_D) % p == 4, "Edwards coefficients mismatch"
    assert (
        MONTGOMERY_A * (EDWARDS_A - EDWARDS_D) - 2 * (EDWARDS_A + EDWARDS_D)
    ) % p == 0, "Montgomery coefficient mismatch"
    assert MONTGOMERY_B == 1, "Weierstrass coefficients assume Montgomery B = 1"
    assert (3 * WEIERSTRASS_A - (3 - MONTGOMERY_A**2)) % p == 0, (
        "Weierstrass A mismatch"
    )
    assert (
        27 * WEIERSTRASS_B - (2 * MONTGOMERY_A**3 - 9 * MONTGOMERY_A)
    ) % p == 0, "Weierstrass B mismatch"

    x, y = GENERATOR_EDWARDS
    assert (
        EDWARDS_A * x * x + y * y - 1 - EDWARDS_D * x * x * y * y
    ) % p == 0, "Generator is not on the Edwards curve"

    assert MERKLE_TREE_DEPTH > 0, "Merkle depth must be positive"
    assert MERKLE_TREE_ARITY == 2, "Only binary Merkle trees are supported"
    return True


# Auto-validate on import
validate_config()
