"""Known-answer vectors for Baby Jubjub ECDSA (generated independently)."""

from __future__ import annotations

from pubkey_membership.config import SUBGROUP_ORDER
from pubkey_membership.curve import GENERATOR
from pubkey_membership.field import scalar_inverse
from pubkey_membership.types import Signature

PRIVATE_KEY_HEX = "0323dbbda9a5aff570d974d71c88334cf99ab9c0455e1d2546ca03ca069eb1e0"

# private key hex -> Weierstrass public key
PUBLIC_KEY_VECTORS = [
    (
        PRIVATE_KEY_HEX,
        (
            7383369888919701441480368741745717804236448589785295824485316386504973064784,
            13046769583748125084667126323794391074141340611556711664428099286902963678262,
        ),
    ),
    (
        "04b81e7180cd9504ce1bf0f728b4c828ad369781986aff07284d60ec1d59850b",
        (
            8022836036792728510020073593790625374591718668941094754729876067757770684825,
            2888043282838146526405156459340757249954671046314727413645487686643973993965,
        ),
    ),
    (
        "02ea6ba4d6ec9b1b724f93a5ddf4ddcc94fc09909753088c272970fe3c99c4d8",
        (
            9714024128310316092057230443118059995407288196097449837364797009977227758081,
            3986000760809817233522229217388333078261970153215912556094459527204210942908,
        ),
    ),
]

# Edwards form of the first public key
PUBLIC_KEY_EDWARDS = (
    11513997017404587999039986937421722453331811838930011493225155799998969860257,
    15702184800053625297652133943476286357553803483146409610785811576616213183541,
)

# (message hash, r hex, s hex), all signed with PRIVATE_KEY_HEX
SIGNATURES_BY_PRIVATE_KEY = [
    (
        0,
        "00EF7145470CEC0B683C629CBA8ED58110000FFE657366F7D5A91F2D149DD8B5",
        "0370C60A23266F520C56DA088B4C4AFAAAF6BB1993A501980F6D8FB6F343984A",
    ),
    (
        1,
        "04BEF5B82A7637BBFF0D3C52DDB982A00C84FE8A386625369B511CF538CD3584",
        "00CA8ED01E70CEC6DE27C1B9F6735B52FB49E4521F50BEEDEED8E81459729E2E",
    ),
    (
        2,
        "05718D88F4B6B357D2D9D53708F1C3EFE61C38C6A8BD107B2779182D80E75665",
        "00906FA5864D2682981DA3B5BABBB5C3EA07E008335ED8266C55546D46B45A42",
    ),
]

# Signatures by a key given only as a point: (message hash, r, s)
EXTERNAL_PUBLIC_KEY = (
    3232533026113810378959142444695349421501562423203727069041340448447821565406,
    2188348859066493967748283765357824083446977800414462976475976389468050954576,
)
SIGNATURES_BY_EXTERNAL_KEY = [
    (
        2946972996217835208449517111206100981106410880664713281589395314649921690550,
        1840783889620414587148889492823509056116889771324083520524283336613943085117,
        1739665441663252318720166579941834138245075960720774698623992586667777500452,
    ),
    (
        959992042565662302991225573197761987736081061736836521396002216380900360528,
        1856322010174419002598766346323954612142211502777436374084285602917776883052,
        620220295126728043540210170239716626150792206560166734872758425758290398102,
    ),
]

# Candidate list for index recovery; only index 2 is a curve point and it
# belongs to PRIVATE_KEY_HEX
RECOVERY_CANDIDATES = [
    "041941f5abe4f903af965d707182b688bd1fa725fd2cbc648fc435feb42a3794593275a2e9b4ad4bc0d2f3ecc8d23e3cf89da889d7aa35ce33f132d87b5bb5c393",
    "049ae9f2ec6a4db43f0e081a436f885b0d3f5753a45b00d2f2e3da38956848c4ff0205d89e14a2e36976bfe033407dbce6b48261d84d201277de0c3b82f08ddb09",
    "041052d6da0c3d7248e39e08912e2daa53c4e54cd9f2d96e3702fa15e77b199a501cd835bbddcc77134dc59dbbde2aa702183a68c90877906a31536eef972fac36",
    "044d9d03f3266f24777ac488f04ec579e1c4bea984398c9b98d99a9e31bc75ef0f13a19471a7297a6f2bf0126ed93d4c55b6e98ec286203e3d761c61922e3a4cda",
]
RECOVERY_INDEX = 2

# Verification nonce point of SIGNATURES_BY_PRIVATE_KEY[2] (message hash 2)
NONCE_POINT = (
    10670285876735019599106866976684908952274911389930362762537090111564921097016,
    9160051989315312112039929478094450530265103887834999493414216896339841057063,
)
NONCE_POINT_T = (
    6952765017569839958343264710546584578753992328892854973252223160184157850745,
    9563206295407598382073804946882877811714977803488938527800721542415224962428,
)
NONCE_POINT_U = (
    12614432555643728606782560810226874354451117249983040637892389649426582274947,
    13906431017424053199814642411232056924432788712909729385753697397225312690892,
)

# Weierstrass image of the Base8 generator
GENERATOR_WEIERSTRASS = (
    14414009007687342025526645003307639786191886886413750648631138442071909631647,
    14577268218881899420966779687690205425227431577728659819975198491127179315626,
)

# Public key of the second private key in PUBLIC_KEY_VECTORS
SECOND_PUBLIC_KEY_HEX = (
    "0411bcc3a7bc7d083b6c67fc7fd33a31bafdfcbf8883dbbf1ab6fc3eba321c3999"
    "0662931714e04b3a3deb0c6102d9bf7a7ac56ba7d281afc07afa803e65d9b5ed"
)


def sign(private_key: int, message_hash: int, nonce: int) -> Signature:
    """Textbook ECDSA signing, for tests only; nonce reuse leaks the key."""
    nonce_point = GENERATOR.scalar_multiply(nonce)
    r = nonce_point.x % SUBGROUP_ORDER
    s = scalar_inverse(nonce) * (message_hash + r * private_key) % SUBGROUP_ORDER
    if r == 0 or s == 0:
        raise ValueError("degenerate nonce, pick another")
    return Signature(r=r, s=s)
