"""rod — run commands tuned to the terminal's color scheme."""

__version__ = "0.1.0"
