"""URI parameter helpers for Library Ledger resources.

Resource templates such as ``library://books/{book_id}`` deliver their path
parameters as strings. Ledger ids are non-negative integers, so every
handler converts them here and reports malformed values the same way.
"""

import logging

from fastmcp.exceptions import ResourceError

logger = logging.getLogger(__name__)


def parse_id_parameter(value: str, name: str) -> int:
    """Convert a URI path parameter to a ledger id.

    Args:
        value: Raw path segment, e.g. ``"12"``
        name: Parameter name used in the error message

    Raises:
        ResourceError: If the segment is not a non-negative integer
    """
    text = value.strip()
    if not text.isdigit():
        logger.debug("Rejected %s parameter %r", name, value)
        raise ResourceError(f"Invalid {name}: {value!r} is not a non-negative integer")
    return int(text)
