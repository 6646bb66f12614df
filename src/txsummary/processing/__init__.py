"""
Processing Package

Orchestration of the load → aggregate → persist → email pipeline.
"""

from .processor import ProcessingResult, TransactionProcessor

__all__ = [
    "ProcessingResult",
    "TransactionProcessor",
]
