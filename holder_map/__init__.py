"""Top-holder bubble map and provider directory data pipeline."""

__version__ = "0.1.0"
