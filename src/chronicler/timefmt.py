import math

_UNITS = (("s", 1_000_000), ("ms", 1_000), ("µs", 1))


def format_elapsed(ms: float) -> str:
    """Format an elapsed time in milliseconds as a compact string.

    Only non-zero components are kept, microseconds being the finest unit:
    - 1500.0 -> "1s 500ms"
    - 0.25 -> "250µs"
    - 0 -> ""
    """
    if ms < 0:
        raise ValueError(f"Elapsed time cannot be negative, got {ms}")

    # Round off float noise first so whole microseconds are not floored away
    remainder = math.floor(round(ms * 1000, 6))
    parts = []
    for unit, size in _UNITS:
        value, remainder = divmod(remainder, size)
        if value:
            parts.append(f"{value}{unit}")

    return " ".join(parts)
