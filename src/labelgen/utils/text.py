"""Text utilities for label layout."""


def split_text(text: str | None, max_length: int) -> list[str]:
    """
    Split text into runs of at most max_length characters.

    Slicing is greedy and left to right, with no regard for word boundaries.
    Empty (or None) text yields a single empty line so callers always have a
    line to place.

    Args:
        text: Text to split. None is treated as empty.
        max_length: Maximum characters per line.

    Returns:
        List of lines, never empty.

    Raises:
        ValueError: If max_length is not greater than 0.

    Examples:
        >>> split_text("ABCDEFG", 3)
        ['ABC', 'DEF', 'G']
        >>> split_text("", 5)
        ['']
    """
    if max_length <= 0:
        raise ValueError(f"max_length must be greater than 0, got: {max_length}")

    if not text:
        return [""]

    return [text[i:i + max_length] for i in range(0, len(text), max_length)]
