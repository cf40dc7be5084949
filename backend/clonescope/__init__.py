"""CloneScope: technology scoring and insights pipeline."""

__version__ = "0.1.0"
