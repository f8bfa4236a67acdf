"""Entity store: point lookups, filtered list queries and writes per entity.

Functions take the caller's Session and never commit; the calling service owns
the transaction boundary.
"""

LIKE_ESCAPE = "\\"


def contains_pattern(term: str) -> str:
    """LIKE pattern matching *term* literally anywhere in the column."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
