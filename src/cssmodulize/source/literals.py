"""JavaScript literal decoding shared by the source layer and the evaluator."""

from __future__ import annotations

import math
import re

__all__ = ["format_number", "parse_number", "unescape"]

_ESCAPE_RE = re.compile(
    r"""
    \\(?:
        u\{(?P<code_point>[0-9a-fA-F]+)\}   # \u{1F600}
      | u(?P<unicode>[0-9a-fA-F]{4})        # é
      | x(?P<hex>[0-9a-fA-F]{2})            # \xe9
      | (?P<newline>\r\n|\r|\n)             # line continuation
      | (?P<char>.)                         # \n, \t, \", ...
    )
    """,
    re.VERBOSE | re.DOTALL,
)

_SURROGATE_RE = re.compile("[\ud800-\udfff]")

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


def _replace_escape(match: re.Match[str]) -> str:
    if match.group("code_point"):
        return chr(int(match.group("code_point"), 16))
    if match.group("unicode"):
        return chr(int(match.group("unicode"), 16))
    if match.group("hex"):
        return chr(int(match.group("hex"), 16))
    if match.group("newline"):
        return ""
    char = match.group("char")
    return _SIMPLE_ESCAPES.get(char, char)


def unescape(raw: str) -> str:
    """Decode the escape sequences of a string or template chunk.

    Surrogate pairs written as two ``\\uXXXX`` escapes are joined into one
    code point; an unpaired surrogate becomes U+FFFD.
    """
    if "\\" not in raw:
        return raw
    decoded = _ESCAPE_RE.sub(_replace_escape, raw)
    if _SURROGATE_RE.search(decoded):
        decoded = decoded.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")
    return decoded


def parse_number(text: str) -> int | float:
    """Return the numeric value of a JavaScript number literal."""
    cleaned = text.replace("_", "")
    if cleaned.endswith("n"):
        cleaned = cleaned[:-1]
    lowered = cleaned.lower()
    if lowered.startswith(("0x", "0o", "0b")):
        return int(cleaned, 0)
    value = float(cleaned)
    if value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


def format_number(value: int | float) -> str:
    """Format a number the way JavaScript's ``String(n)`` does for common values."""
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    # JavaScript keeps positional notation down to 1e-6 and writes the
    # exponent without zero padding and with an explicit sign.
    mantissa, exponent = text.split("e")
    power = int(exponent)
    if -6 <= power < 21:
        fraction = mantissa.split(".")[1] if "." in mantissa else ""
        return f"{value:.{len(fraction) - power}f}"
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"
