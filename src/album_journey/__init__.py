"""Album Journey: one album a day, rated in order."""

__version__ = "0.1.0"
