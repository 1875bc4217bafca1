"""Canonical Amino sign documents for wallet-signed request payloads.

The wallet signs a legacy Amino sign document that wraps the request ``data``
in a single message. The server rebuilds the same document from the request
body, so every byte here has to match what the browser wallet produced:

* ``value.data`` is ``JSON.stringify(data, undefined, 2)`` of the whole
  payload, keys in the order the client sent them.
* The document itself is serialized with recursively sorted keys, no
  whitespace, and ``&``, ``<`` and ``>`` replaced by unicode escapes.

``json.dumps`` cannot produce either form exactly: JavaScript prints numbers
with its own shortest-form rules (``0.00001``, ``1e-7``, ``1e+21``) and escapes
lone surrogates instead of emitting them raw. The writer below follows
``JSON.stringify`` and reuses the stdlib string escaper for everything else.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from json.encoder import encode_basestring
from typing import Any, Final

from wallet_auth.core.security import derive_address

ZERO_AMOUNT: Final[str] = "0"
ZERO_GAS: Final[str] = "0"
ACCOUNT_NUMBER: Final[str] = "0"
SEQUENCE: Final[str] = "0"
MEMO: Final[str] = ""
PRETTY_INDENT: Final[str] = "  "

# Number.MAX_SAFE_INTEGER; larger integers lose precision in JSON.parse
_MAX_SAFE_INTEGER: Final[int] = 2**53 - 1
# Number.prototype.toString switches to exponent form outside 1e-7 < |x| < 1e21
_MAX_PLAIN_EXPONENT: Final[int] = 21
_MIN_PLAIN_EXPONENT: Final[int] = -6
_MAX_ARRAY_INDEX: Final[int] = 2**32 - 2
_ARRAY_INDEX: Final[re.Pattern[str]] = re.compile(r"0|[1-9][0-9]*")
_LONE_SURROGATE: Final[re.Pattern[str]] = re.compile("[%s-%s]" % (chr(0xD800), chr(0xDFFF)))
_AMINO_ESCAPES: Final[dict[str, str]] = {char: "\\u%04x" % ord(char) for char in "&<>"}


def js_number(value: int | float) -> str:
    """Render ``value`` the way JavaScript's ``JSON.stringify`` prints a number.

    Integers beyond the safe range are rounded to the nearest double first,
    as ``JSON.parse`` would have done; non-finite values become ``null``.
    """
    if isinstance(value, int):
        if abs(value) <= _MAX_SAFE_INTEGER:
            return str(value)
        try:
            value = float(value)
        except OverflowError:
            return "null"
    if not math.isfinite(value):
        return "null"
    if value == 0:
        return "0"

    # repr gives the shortest round-trip digits, the same ones JavaScript picks.
    mantissa, _, exponent = repr(abs(value)).partition("e")
    whole, _, fraction = mantissa.partition(".")
    all_digits = whole + fraction
    significant = all_digits.lstrip("0")
    # value == 0.<digits> * 10**point
    point = len(whole) + int(exponent or 0) - (len(all_digits) - len(significant))
    digits = significant.rstrip("0")
    count = len(digits)

    if count <= point <= _MAX_PLAIN_EXPONENT:
        text = digits + "0" * (point - count)
    elif 0 < point <= _MAX_PLAIN_EXPONENT:
        text = f"{digits[:point]}.{digits[point:]}"
    elif _MIN_PLAIN_EXPONENT < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        power = point - 1
        fraction_part = f".{digits[1:]}" if count > 1 else ""
        text = f"{digits[0]}{fraction_part}e{'+' if power >= 0 else '-'}{abs(power)}"
    return f"-{text}" if value < 0 else text


def _escape_code_unit(match: re.Match[str]) -> str:
    return "\\u%04x" % ord(match.group())


def _quote(text: str) -> str:
    return _LONE_SURROGATE.sub(_escape_code_unit, encode_basestring(text))


def _is_array_index(key: str) -> bool:
    return bool(_ARRAY_INDEX.fullmatch(key)) and int(key) <= _MAX_ARRAY_INDEX


def _js_items(mapping: Mapping[str, Any]) -> list[tuple[str, Any]]:
    """Return entries in JavaScript property order: array indices ascending first."""
    items = list(mapping.items())
    indices = sorted((item for item in items if _is_array_index(item[0])), key=lambda item: int(item[0]))
    return indices + [item for item in items if not _is_array_index(item[0])]


def _wrap(opening: str, parts: list[str], closing: str, indent: str | None, depth: int) -> str:
    if not parts:
        return opening + closing
    if not indent:
        return opening + ",".join(parts) + closing
    inner = "\n" + indent * (depth + 1)
    return opening + inner + f",{inner}".join(parts) + "\n" + indent * depth + closing


def _stringify(value: Any, indent: str | None, depth: int = 0) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, int | float):
        return js_number(value)
    if isinstance(value, Mapping):
        separator = ": " if indent else ":"
        parts = [
            f"{_quote(key)}{separator}{_stringify(item, indent, depth + 1)}"
            for key, item in _js_items(value)
        ]
        return _wrap("{", parts, "}", indent, depth)
    if isinstance(value, Sequence):
        parts = [_stringify(item, indent, depth + 1) for item in value]
        return _wrap("[", parts, "]", indent, depth)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _sorted(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _sorted(value[key]) for key in sorted(value)}
    if isinstance(value, list | tuple):
        return [_sorted(item) for item in value]
    return value


def pretty_json(data: Mapping[str, Any]) -> str:
    """Serialize ``data`` exactly like ``JSON.stringify(data, undefined, 2)``."""
    return _stringify(data, PRETTY_INDENT)


def make_sign_doc(data: Mapping[str, Any]) -> dict[str, Any]:
    """Assemble the sign document for a request payload.

    Args:
        data: The request ``data`` mapping, including its ``auth`` claim.

    Returns:
        The unsigned Amino document with zero fee, account and sequence.

    Raises:
        KeyError, TypeError: If the claim fields are missing or mistyped.
        InvalidPublicKey: If the signer address cannot be derived.
    """
    auth = data["auth"]
    signer = derive_address(auth["publicKey"], auth["chainBech32Prefix"])
    return {
        "chain_id": auth["chainId"],
        "account_number": ACCOUNT_NUMBER,
        "sequence": SEQUENCE,
        "fee": {
            "amount": [{"denom": auth["chainFeeDenom"], "amount": ZERO_AMOUNT}],
            "gas": ZERO_GAS,
        },
        "msgs": [
            {
                "type": auth["type"],
                "value": {
                    "signer": signer,
                    "data": pretty_json(data),
                },
            }
        ],
        "memo": MEMO,
    }


def serialize_sign_doc(sign_doc: Mapping[str, Any]) -> bytes:
    """Serialize a sign document into the bytes a wallet signs."""
    encoded = _stringify(_sorted(sign_doc), None)
    for char, escaped in _AMINO_ESCAPES.items():
        encoded = encoded.replace(char, escaped)
    return encoded.encode("utf-8")


def build_sign_message(data: Mapping[str, Any]) -> bytes:
    """Return the canonical signed bytes for a request ``data`` mapping."""
    return serialize_sign_doc(make_sign_doc(data))
