"""Application containers: manifest validation and dependency consistency."""

__version__ = "0.1.0"
