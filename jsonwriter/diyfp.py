"""Do-it-yourself floating point values and cached powers of ten for Grisu2."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass

PRECISION = 64
_MASK64 = (1 << PRECISION) - 1

ALPHA = -60
GAMMA = -32

_CACHED_POWERS_MIN_DEC_EXP = -300
_CACHED_POWERS_DEC_STEP = 8


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


@dataclass(frozen=True)
class DiyFp:
    """A number ``f * 2**e`` with a 64-bit unsigned significand."""

    f: int
    e: int

    def __post_init__(self) -> None:
        if not 0 <= self.f <= _MASK64:
            raise ValueError(f"significand out of 64-bit range: {self.f}")

    def sub(self, other: DiyFp) -> DiyFp:
        """Return ``self - other``; both must share an exponent and self >= other."""
        if self.e != other.e:
            raise ValueError("exponents differ")
        if self.f < other.f:
            raise ValueError("result would be negative")
        return DiyFp(self.f - other.f, self.e)

    def mul(self, other: DiyFp) -> DiyFp:
        """Return ``self * other``, keeping the upper 64 bits rounded half up."""
        h = (self.f * other.f + (1 << 63)) >> 64
        return DiyFp(h, self.e + other.e + PRECISION)

    def normalize(self) -> DiyFp:
        """Shift the significand so that its top bit is set."""
        if self.f == 0:
            raise ValueError("cannot normalize zero")
        shift = PRECISION - self.f.bit_length()
        return DiyFp(self.f << shift, self.e - shift)

    def normalize_to(self, target_exponent: int) -> DiyFp:
        """Rescale to the given (smaller or equal) exponent without losing bits."""
        delta = self.e - target_exponent
        if delta < 0:
            raise ValueError("target exponent is larger than the current one")
        shifted = self.f << delta
        if shifted > _MASK64:
            raise ValueError("significand would overflow 64 bits")
        return DiyFp(shifted, target_exponent)


@dataclass(frozen=True)
class Boundaries:
    """A normalized value together with the lower and upper rounding boundaries."""

    w: DiyFp
    minus: DiyFp
    plus: DiyFp


def compute_boundaries(value: float, single: bool = False) -> Boundaries:
    """Return the normalized value and its boundaries m- and m+.

    With ``single`` the value is treated as an IEEE single precision number.
    The value must be finite and positive.
    """
    if not math.isfinite(value):
        raise ValueError("value must be finite")
    if not value > 0:
        raise ValueError("value must be positive")

    if single:
        precision, max_exponent = 24, 128
        (bits,) = struct.unpack("<I", struct.pack("<f", value))
    else:
        precision, max_exponent = 53, 1024
        (bits,) = struct.unpack("<Q", struct.pack("<d", value))

    bias = max_exponent - 1 + (precision - 1)
    min_exp = 1 - bias
    hidden_bit = 1 << (precision - 1)

    biased_exp = bits >> (precision - 1)
    fraction = bits & (hidden_bit - 1)

    if biased_exp == 0:
        v = DiyFp(fraction, min_exp)
    else:
        v = DiyFp(fraction + hidden_bit, biased_exp - bias)

    lower_boundary_is_closer = fraction == 0 and biased_exp > 1
    m_plus = DiyFp(2 * v.f + 1, v.e - 1)
    if lower_boundary_is_closer:
        m_minus = DiyFp(4 * v.f - 1, v.e - 2)
    else:
        m_minus = DiyFp(2 * v.f - 1, v.e - 1)

    w_plus = m_plus.normalize()
    w_minus = m_minus.normalize_to(w_plus.e)
    return Boundaries(v.normalize(), w_minus, w_plus)


@dataclass(frozen=True)
class CachedPower:
    """A normalized approximation ``f * 2**e`` of ``10**k``."""

    f: int
    e: int
    k: int


CACHED_POWERS: tuple[CachedPower, ...] = tuple(
    CachedPower(f, e, k)
    for f, e, k in (
        (0xAB70FE17C79AC6CA, -1060, -300),
        (0xFF77B1FCBEBCDC4F, -1034, -292),
        (0xBE5691EF416BD60C, -1007, -284),
        (0x8DD01FAD907FFC3C, -980, -276),
        (0xD3515C2831559A83, -954, -268),
        (0x9D71AC8FADA6C9B5, -927, -260),
        (0xEA9C227723EE8BCB, -901, -252),
        (0xAECC49914078536D, -874, -244),
        (0x823C12795DB6CE57, -847, -236),
        (0xC21094364DFB5637, -821, -228),
        (0x9096EA6F3848984F, -794, -220),
        (0xD77485CB25823AC7, -768, -212),
        (0xA086CFCD97BF97F4, -741, -204),
        (0xEF340A98172AACE5, -715, -196),
        (0xB23867FB2A35B28E, -688, -188),
        (0x84C8D4DFD2C63F3B, -661, -180),
        (0xC5DD44271AD3CDBA, -635, -172),
        (0x936B9FCEBB25C996, -608, -164),
        (0xDBAC6C247D62A584, -582, -156),
        (0xA3AB66580D5FDAF6, -555, -148),
        (0xF3E2F893DEC3F126, -529, -140),
        (0xB5B5ADA8AAFF80B8, -502, -132),
        (0x87625F056C7C4A8B, -475, -124),
        (0xC9BCFF6034C13053, -449, -116),
        (0x964E858C91BA2655, -422, -108),
        (0xDFF9772470297EBD, -396, -100),
        (0xA6DFBD9FB8E5B88F, -369, -92),
        (0xF8A95FCF88747D94, -343, -84),
        (0xB94470938FA89BCF, -316, -76),
        (0x8A08F0F8BF0F156B, -289, -68),
        (0xCDB02555653131B6, -263, -60),
        (0x993FE2C6D07B7FAC, -236, -52),
        (0xE45C10C42A2B3B06, -210, -44),
        (0xAA242499697392D3, -183, -36),
        (0xFD87B5F28300CA0E, -157, -28),
        (0xBCE5086492111AEB, -130, -20),
        (0x8CBCCC096F5088CC, -103, -12),
        (0xD1B71758E219652C, -77, -4),
        (0x9C40000000000000, -50, 4),
        (0xE8D4A51000000000, -24, 12),
        (0xAD78EBC5AC620000, 3, 20),
        (0x813F3978F8940984, 30, 28),
        (0xC097CE7BC90715B3, 56, 36),
        (0x8F7E32CE7BEA5C70, 83, 44),
        (0xD5D238A4ABE98068, 109, 52),
        (0x9F4F2726179A2245, 136, 60),
        (0xED63A231D4C4FB27, 162, 68),
        (0xB0DE65388CC8ADA8, 189, 76),
        (0x83C7088E1AAB65DB, 216, 84),
        (0xC45D1DF942711D9A, 242, 92),
        (0x924D692CA61BE758, 269, 100),
        (0xDA01EE641A708DEA, 295, 108),
        (0xA26DA3999AEF774A, 322, 116),
        (0xF209787BB47D6B85, 348, 124),
        (0xB454E4A179DD1877, 375, 132),
        (0x865B86925B9BC5C2, 402, 140),
        (0xC83553C5C8965D3D, 428, 148),
        (0x952AB45CFA97A0B3, 455, 156),
        (0xDE469FBD99A05FE3, 481, 164),
        (0xA59BC234DB398C25, 508, 172),
        (0xF6C69A72A3989F5C, 534, 180),
        (0xB7DCBF5354E9BECE, 561, 188),
        (0x88FCF317F22241E2, 588, 196),
        (0xCC20CE9BD35C78A5, 614, 204),
        (0x98165AF37B2153DF, 641, 212),
        (0xE2A0B5DC971F303A, 667, 220),
        (0xA8D9D1535CE3B396, 694, 228),
        (0xFB9B7CD9A4A7443C, 720, 236),
        (0xBB764C4CA7A44410, 747, 244),
        (0x8BAB8EEFB6409C1A, 774, 252),
        (0xD01FEF10A657842C, 800, 260),
        (0x9B10A4E5E9913129, 827, 268),
        (0xE7109BFBA19C0C9D, 853, 276),
        (0xAC2820D9623BF429, 880, 284),
        (0x80444B5E7AA7CF85, 907, 292),
        (0xBF21E44003ACDD2D, 933, 300),
        (0x8E679C2F5E44FF8F, 960, 308),
        (0xD433179D9C8CB841, 986, 316),
        (0x9E19DB92B4E31BA9, 1013, 324),
    )
)


def get_cached_power_for_binary_exponent(e: int) -> CachedPower:
    """Return a cached power c such that ALPHA <= c.e + e + 64 <= GAMMA."""
    if not -1500 <= e <= 1500:
        raise ValueError(f"binary exponent out of range: {e}")

    f = ALPHA - e - 1
    # ceil(f * log10(2)) using log10(2) ~= 78913 / 2**18
    k = _trunc_div(f * 78913, 1 << 18) + (1 if f > 0 else 0)

    index = _trunc_div(
        -_CACHED_POWERS_MIN_DEC_EXP + k + (_CACHED_POWERS_DEC_STEP - 1),
        _CACHED_POWERS_DEC_STEP,
    )
    if not 0 <= index < len(CACHED_POWERS):
        raise ValueError(f"no cached power for binary exponent {e}")

    cached = CACHED_POWERS[index]
    if not ALPHA <= cached.e + e + PRECISION <= GAMMA:
        raise ValueError(f"no cached power for binary exponent {e}")
    return cached