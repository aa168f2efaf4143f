"""templategen — build-time template generator with staleness checks."""

__version__ = "0.1.0"
