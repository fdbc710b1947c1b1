"""Attestation oracle: verified account facts signed with Pedersen-hash EdDSA."""

__version__ = "0.1.0"
