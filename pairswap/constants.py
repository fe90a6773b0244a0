"""Engine-wide constants.

Numeric bounds mirror the on-ledger word sizes the reserves and
accumulators are stored in; addresses are lowercase hex.
"""

from eth_utils import keccak

UINT32_MODULUS = 2**32
UINT112_MAX = 2**112 - 1
UINT256_MAX = 2**256 - 1

# Fixed-point scale of the price accumulators (UQ112x112)
Q112 = 2**112

# Shares permanently locked at the burn sink on a pool's first deposit
MINIMUM_LIQUIDITY = 1000

# Swap fee in basis points, charged on the input side only (0.3%)
DEFAULT_FEE_BPS = 30
FEE_DENOMINATOR = 10_000

ZERO_ADDRESS = "0x" + "00" * 20
# Locked liquidity goes to the null identity: nobody can ever sign for it
BURN_ADDRESS = ZERO_ADDRESS

# CREATE2 marker byte used by pool address derivation
CREATE2_PREFIX = b"\xff"

# Digest standing in for the pool's deployed code; it binds derived pool
# addresses to this engine version
POOL_INIT_CODE_HASH: bytes = keccak(text="pairswap.pools.pool.Pool:v1")

# EIP-712 type hashes for share permits
EIP712_DOMAIN_TYPEHASH: bytes = keccak(
    text="EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
)
PERMIT_TYPEHASH: bytes = keccak(
    text="Permit(address owner,address spender,uint256 value,uint256 nonce,uint256 deadline)"
)
