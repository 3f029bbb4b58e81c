import struct
from typing import NamedTuple, Union

Identity = Union[int, str]

FNV32_OFFSET_BASIS = 0x811C9DC5
FNV32_PRIME = 0x01000193
MASK_32 = 0xFFFFFFFF


def _code_units(text: str) -> tuple[int, ...]:
    # UTF-16 code units, so astral characters hash like JS charCodeAt does
    data = text.encode("utf-16-le", "surrogatepass")
    return struct.unpack(f"<{len(data) // 2}H", data)


def hash_u32(text: str) -> int:
    """FNV-1a, 32-bit. Returns an int in [0, 2**32 - 1]."""
    h = FNV32_OFFSET_BASIS
    for unit in _code_units(text):
        h ^= unit
        h = (h * FNV32_PRIME) & MASK_32
    return h


def selection_key(identity: Identity | None, day: str) -> str:
    if identity is None:
        return day
    return f"{identity}:{day}"


def wish_index(identity: Identity | None, day: str, length: int) -> int:
    """
    Stable index into a list of ``length`` entries for (identity, day).

    Only ``None`` means "no identity"; callers normalise empty strings
    themselves. A non-positive length yields 0.
    """
    h = hash_u32(selection_key(identity, day))
    if length <= 0:
        return 0
    return h % length


class VotePercentages(NamedTuple):
    likes_pct: int
    dislikes_pct: int
    total_votes: int


def vote_percentages(likes: int, dislikes: int) -> VotePercentages:
    total = likes + dislikes
    if total == 0:
        return VotePercentages(0, 0, 0)
    # integer round-half-up of likes / total * 100
    likes_pct = (likes * 200 + total) // (2 * total)
    return VotePercentages(likes_pct, 100 - likes_pct, total)
