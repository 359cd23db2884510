"""Durable BIP-329 wallet label store."""

__version__ = "0.1.0"
