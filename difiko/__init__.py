"""Core of a keyboard-driven reviewer for local git branch comparisons."""

__version__ = "0.1.5"