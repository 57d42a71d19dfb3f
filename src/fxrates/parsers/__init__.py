"""Feed parsers for supported rate document formats."""

from fxrates.parsers.ecb import ECBFeedParser

__all__ = ["ECBFeedParser"]
