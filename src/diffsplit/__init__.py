"""diffsplit: split a unified diff into one file per touched path."""

__version__ = "0.3.0"
