"""propcheck — validate ``fields=`` projections against Python type schemas."""

__version__ = "0.1.0"
