"""Parsing of untrusted text into structured values.

Decoder errors never escape: they come back as ``ParseFailure`` values
carrying the decoder's own message.
"""

from __future__ import annotations

import json
import logging
import math

from jsondiffview.config import DEFAULT_CONFIG, DiffConfig
from jsondiffview.errors import ParseFailure
from jsondiffview.values import DepthExceededError, JsonValue, from_python

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> float:
    # json accepts NaN/Infinity literals; standard JSON does not
    raise ValueError(f"Invalid JSON literal: {name}")


def _parse_float(literal: str) -> float:
    value = float(literal)
    if math.isinf(value):
        raise ValueError(f"Number out of range: {literal}")
    return value


def parse(text: str, config: DiffConfig | None = None) -> JsonValue | ParseFailure:
    """Decode text as a single JSON document.

    Leading and trailing whitespace is ignored. No recovery is attempted.

    Args:
        text: Raw document text
        config: Input limits (uses defaults if None)

    Returns:
        The parsed JsonValue, or a ParseFailure with the decoder's message

    Example:
        >>> parse('{"a": 1}').kind
        <ValueKind.OBJECT: 'object'>
        >>> parse("not json").message
        'Expecting value: line 1 column 1 (char 0)'
    """
    config = config or DEFAULT_CONFIG
    stripped = text.strip()

    size_bytes = len(stripped.encode("utf-8"))
    if size_bytes > config.max_input_bytes:
        return ParseFailure(
            f"Input size ({size_bytes} bytes) exceeds maximum ({config.max_input_bytes} bytes)"
        )

    try:
        # JSONDecodeError is a ValueError, as are rejected literals and oversized ints
        data = json.loads(stripped, parse_constant=_reject_constant, parse_float=_parse_float)
    except ValueError as e:
        logger.debug("Decoder rejected input: %s", e)
        return ParseFailure(str(e))
    except RecursionError:
        return ParseFailure(f"Maximum nesting depth of {config.max_depth} exceeded")

    try:
        return from_python(data, max_depth=config.max_depth)
    except DepthExceededError as e:
        logger.debug("Input rejected: %s", e)
        return ParseFailure(str(e))
    except RecursionError:
        return ParseFailure(f"Maximum nesting depth of {config.max_depth} exceeded")


def is_failure(result: JsonValue | ParseFailure) -> bool:
    """Whether a parse result is a failure."""
    return isinstance(result, ParseFailure)
