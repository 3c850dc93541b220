"""rgbridge: run ripgrep from a front end and get structured results back."""

__version__ = "0.1.0"
