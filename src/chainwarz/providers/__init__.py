"""Concrete wallet provider implementations."""

from chainwarz.providers.jsonrpc import JsonRpcProvider

__all__ = ["JsonRpcProvider"]
