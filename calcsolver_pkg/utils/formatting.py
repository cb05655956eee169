from __future__ import annotations

import json
from typing import TYPE_CHECKING

from ..logging_config import get_logger

if TYPE_CHECKING:
    from ..types import SolveResult

logger = get_logger("formatting")


def format_number_no_trailing_zeros(num: int | float | str) -> str:
    """Format a number without a trailing ``.0`` or trailing decimal zeros."""
    if isinstance(num, int) and not isinstance(num, bool):
        return str(num)
    try:
        value = float(num)
    except (ValueError, TypeError):
        # Not a number; show it unchanged
        return str(num)
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    text = str(value)
    if "." in text and "e" not in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_superscript(text: str) -> str:
    """Render simple integer powers with Unicode superscripts (``x ^ 3`` -> ``x³``)."""
    digits = str.maketrans("0123456789-", "⁰¹²³⁴⁵⁶⁷⁸⁹⁻")
    out = []
    tokens = text.split(" ")
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if (
            token == "^"
            and out
            and i + 1 < len(tokens)
            and tokens[i + 1].lstrip("-").isdigit()
            # x ^ 2 ^ 3 is x ^ 8, not x² ^ 3
            and (i + 2 >= len(tokens) or tokens[i + 2] != "^")
            and (i < 2 or tokens[i - 2] != "^")
        ):
            out[-1] = out[-1] + tokens[i + 1].translate(digits)
            i += 2
            continue
        out.append(token)
        i += 1
    return " ".join(out)


def print_result(result: SolveResult, output_format: str = "human") -> None:
    """Print a solve result in the requested format (``human`` or ``json``)."""
    if output_format == "json":
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return
    try:
        print(result.text)
    except UnicodeEncodeError:
        # Consoles without UTF-8 cannot show the integral sign
        logger.debug("Console cannot encode result, falling back to ASCII")
        print(result.text.replace("∫", "integral").replace("π", "pi"))
