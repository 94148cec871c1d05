"""
Services composing repositories into higher level operations.
"""

from .transaction_service import TransactionService

__all__ = ["TransactionService"]
