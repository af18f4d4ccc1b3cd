"""
Custom exceptions for Financey
"""
from __future__ import annotations
from typing import Any, Dict, Optional


class FinanceyError(Exception):
    """Base exception for all Financey errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CsvFormatError(FinanceyError):
    """Raised when CSV text cannot be turned into records."""
    pass


class AmountParseError(CsvFormatError):
    """Raised when an Amount cell is not a number."""
    pass


class FileProcessingError(FinanceyError):
    """Raised when an input file cannot be read."""
    pass


class NothingPendingError(FinanceyError):
    """Raised when classifying with no pending record left."""
    pass


class ConfigurationError(FinanceyError):
    """Raised when settings are invalid."""
    pass


class ExportError(FinanceyError):
    """Raised when writing a report fails."""
    pass
