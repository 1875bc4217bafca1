"""High-level signing workflows used by the auth gate."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from wallet_auth.core.security import verify_signature
from wallet_auth.services.sign_doc import build_sign_message

logger = logging.getLogger(__name__)


def verify_request_signature(data: Mapping[str, Any], signature: str) -> bool:
    """Validate that a request signature matches the payload under its claimed key.

    Args:
        data: The raw request ``data`` mapping, exactly as the client sent it.
        signature: Base64-encoded signature over the canonical sign document.

    Returns:
        True if the signature is valid for the canonical message; False otherwise,
        including when the message cannot be built from ``data``.
    """
    try:
        message = build_sign_message(data)
        public_key = data["auth"]["publicKey"]
    except Exception as err:
        logger.warning("Signature verification: could not build sign doc: %s", err)
        return False

    return verify_signature(public_key, message, signature)
