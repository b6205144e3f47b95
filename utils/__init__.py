"""Shared utilities for the backend."""
from utils.result import ErrorType, Result
from utils.serialize import money, rate, timestamp

__all__ = [
    "ErrorType",
    "Result",
    "money",
    "rate",
    "timestamp",
]
