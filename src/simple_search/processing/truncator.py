"""
Content budget enforcement.

Trims readable text to a budget of non-whitespace characters while keeping
the original whitespace layout up to the cut point.
"""


def count_visible_chars(content: str) -> int:
    """Count the non-whitespace characters in a string."""
    return sum(1 for ch in content if not ch.isspace())


def trim_content(content: str, max_chars: int) -> str:
    """
    Trim content to max_chars characters, not counting whitespace.

    Text already within budget is returned unchanged, trailing whitespace
    included. Otherwise the result ends with the non-whitespace character
    that exhausts the budget.

    Args:
        content: Text to trim
        max_chars: Maximum number of non-whitespace characters to keep

    Returns:
        The trimmed text
    """
    if count_visible_chars(content) <= max_chars:
        return content

    trimmed = []
    char_count = 0
    for ch in content:
        if char_count >= max_chars:
            break
        trimmed.append(ch)
        if not ch.isspace():
            char_count += 1

    return "".join(trimmed)
