"""Stateless HTTP authentication with wallet signatures and replay-protected nonces."""

__version__ = "0.1.0"
