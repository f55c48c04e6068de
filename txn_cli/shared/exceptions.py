"""Project-wide custom exceptions."""

from __future__ import annotations


class TxnScanError(Exception):
    """Base exception for the transaction scanning suite."""


class ConfigurationError(TxnScanError):
    """Raised when configuration loading or validation fails."""


class ExtractionError(TxnScanError):
    """Raised when a page cannot be read or parsed into tables."""


class ChannelError(TxnScanError):
    """Raised when a scan request cannot be delivered or answered."""


class ChannelTimeoutError(ChannelError):
    """Raised when a responder does not answer within the timeout."""


class NoResponderError(ChannelError):
    """Raised when no responder is attached to the channel."""
