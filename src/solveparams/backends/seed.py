from __future__ import annotations


def clamp_seed(requested: int | None, max_valid: int) -> int | None:
    """Clamp ``requested`` into ``[0, max_valid]``; unset stays unset."""
    if max_valid < 0:
        raise ValueError("max_valid must be >= 0")
    if requested is None:
        return None
    return max(0, min(max_valid, requested))
