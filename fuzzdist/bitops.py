"""Fixed-width 64-bit bit manipulation helpers used by the bit-parallel algorithms."""

from __future__ import annotations

WORD_BITS = 64
MASK64 = (1 << WORD_BITS) - 1


def bit_mask_lsb(n: int) -> int:
    """Return a 64-bit word with the lowest ``n`` bits set."""
    if n < 0:
        raise ValueError("bit count must not be negative")
    if n >= WORD_BITS:
        return MASK64
    return (1 << n) - 1


def blsi(x: int) -> int:
    """Extract the lowest set bit of ``x``; 0 if no bit is set."""
    x &= MASK64
    return x & -x


def blsr(x: int) -> int:
    """Clear the lowest set bit of ``x``."""
    x &= MASK64
    return x & (x - 1) & MASK64


def blsmsk(x: int) -> int:
    """Set all bits up to and including the lowest set bit; all bits if ``x`` is 0."""
    x &= MASK64
    return (x ^ (x - 1)) & MASK64


def popcount(x: int) -> int:
    """Number of set bits in the 64-bit word ``x``."""
    return (x & MASK64).bit_count()


def rotl(x: int, n: int) -> int:
    """Rotate the 64-bit word ``x`` left by ``n`` bits (``0 <= n < 64``)."""
    if not 0 <= n < WORD_BITS:
        raise ValueError("rotation must be in the range [0, 64)")
    x &= MASK64
    return ((x << n) | (x >> ((-n) & (WORD_BITS - 1)))) & MASK64


def countr_zero(x: int) -> int:
    """Number of trailing zero bits of a non-zero 64-bit word."""
    x &= MASK64
    if x == 0:
        raise ValueError("trailing zero count of 0 is undefined")
    return (x & -x).bit_length() - 1


def ceil_div(a: int, divisor: int) -> int:
    """Quotient rounded away from the truncated result when there is a remainder."""
    quotient = abs(a) // abs(divisor)
    if (a < 0) != (divisor < 0):
        quotient = -quotient
    return quotient + int(a - quotient * divisor != 0)


def shr64(a: int, shift: int) -> int:
    """Shift right; shifts of 64 bits or more give 0."""
    return (a & MASK64) >> shift if shift < WORD_BITS else 0


def shl64(a: int, shift: int) -> int:
    """Shift left within 64 bits; shifts of 64 bits or more give 0."""
    return ((a & MASK64) << shift) & MASK64 if shift < WORD_BITS else 0


def addc64(a: int, b: int, carryin: int) -> tuple[int, int]:
    """Add with carry; returns ``(sum, carry_out)`` for 64-bit words."""
    a = (a + carryin) & MASK64
    carry = int(a < carryin)
    a = (a + b) & MASK64
    carry |= int(a < b)
    return a, carry