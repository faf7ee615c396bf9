"""Daily article curation with preference feedback."""

__version__ = "0.1.0"
