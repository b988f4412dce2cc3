"""Deterministic random source and identity-derived seeds."""

from identityprism.models import AttributeRecord

_LCG_A = 9301
_LCG_C = 49297
_LCG_M = 233280


class SeededRandom:
    """Linear congruential generator producing floats in [0, 1).

    Visually decorrelated, not cryptographic. Two instances built from the
    same seed yield the same endless sequence.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = abs(int(seed)) % _LCG_M

    def next(self) -> float:
        self._state = (self._state * _LCG_A + _LCG_C) % _LCG_M
        return self._state / _LCG_M


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x1_0000_0000 if value & 0x8000_0000 else value


def hash_identity(identity: str) -> int:
    """Fold an identity string into a non-negative 32-bit hash.

    Iterates UTF-16 code units with ``hash = hash * 31 + code``, wrapping to a
    signed 32-bit integer after every step, and returns the absolute value.
    An empty string hashes to 0.
    """
    data = identity.encode("utf-16-le", errors="surrogatepass")
    h = 0
    for i in range(0, len(data), 2):
        code = data[i] | (data[i + 1] << 8)
        h = _to_int32((h << 5) - h + code)
    return abs(h)


def derive_seed(identity: str, attributes: AttributeRecord) -> int:
    """Seed for scene generation.

    Holdings are added to the identity hash so accounts whose identities
    collide still diverge when their holdings differ.
    """
    return hash_identity(identity) + attributes.unique_token_count + attributes.nft_count
