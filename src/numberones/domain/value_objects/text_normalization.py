"""Display-text normalization for scraped track and artist names."""

import logging

logger = logging.getLogger(__name__)


# Hey future me, the chart site prints names in ALL CAPS and we want "Stuart Ashworth".
# This MUST always return a string. A zero-length token (double space, leading or
# trailing space) returns "" for the whole value instead of a half-fixed name, and
# callers rely on never seeing an exception from here. Don't "fix" that into validation.
def to_sentence_case(value: str | None) -> str:
    """Upper-case the first letter of each space-separated word, lower-case the rest.

    Args:
        value: Raw text, usually ALL CAPS

    Returns:
        Sentence-cased text, or "" if the value is empty or malformed
    """
    if not value:
        return ""

    try:
        words = []
        for word in value.split(" "):
            if not word:
                raise ValueError("empty token")
            words.append(word[0].upper() + word[1:].lower())
        return " ".join(words)
    except (AttributeError, ValueError):
        logger.debug("Could not sentence-case %r", value)
        return ""


__all__ = ["to_sentence_case"]
