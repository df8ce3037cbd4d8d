"""Calendar view and booking aggregation engine for the agency back office."""

__version__ = "0.1.0"
