def normalize(value: str) -> str:
    """Case-folded form used for every case-insensitive comparison."""
    return value.casefold()


def contains_ci(value: str | None, q: str) -> bool:
    """Case-insensitive substring test; missing values never match."""
    if not value:
        return False
    return normalize(q) in normalize(value)


def equals_ci(value: str | None, q: str) -> bool:
    if value is None:
        return False
    return normalize(value) == normalize(q)
