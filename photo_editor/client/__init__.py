"""
Relay client for the photo editor server.
"""

from .relay_client import RelayClient

__all__ = ["RelayClient"]
