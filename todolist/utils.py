import re

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

# signed 64-bit range, the widest id any backend column can hold
ID_MIN = -(2**63)
ID_MAX = 2**63 - 1


def coerce_id(raw: str | None) -> int:
    """Coerce a request id the lenient way old links relied on.

    The leading integer of ``raw`` is used ("12abc" -> 12) and clamped to the
    signed 64-bit range; anything without one becomes 0, which never matches a row.
    """
    if raw is None:
        return 0
    match = _LEADING_INT.match(raw)
    if not match:
        return 0
    return max(ID_MIN, min(ID_MAX, int(match.group(1))))


def clean_description(raw: str | None) -> str:
    return (raw or "").strip()
