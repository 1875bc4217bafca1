"""Core configuration, errors and cryptographic primitives."""
