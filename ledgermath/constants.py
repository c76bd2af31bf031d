"""Numeric constants shared across the ledgermath package.

Centralizes word width, masks and the fixed-point scale.
"""

# Machine word width (bits) and its all-ones mask
WORD_BITS = 256
UINT256_MAX = 2**256 - 1

# Top bit of the word carries the two's-complement sign
SIGN_BIT = 1 << (WORD_BITS - 1)

# Signed range representable without aliasing
INT256_MIN = -(2**255)
INT256_MAX = 2**255 - 1

# Widths accepted by the typed constructors and narrowing conversions
U8_BITS = 8
U16_BITS = 16
U32_BITS = 32
U64_BITS = 64
U128_BITS = 128
U256_BITS = WORD_BITS

# Fixed-point scale (18 decimals)
ONE_18 = 10**18
SCALE = ONE_18
