"""A strict CSS linter for properties, at-rules, values, units, duplicates and order."""

__version__ = "0.1.0"