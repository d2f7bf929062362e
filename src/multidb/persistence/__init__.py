"""
Transaction handling.
"""

from .transaction import Transaction

__all__ = ["Transaction"]
