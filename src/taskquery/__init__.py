"""taskquery - a query language for filtering, sorting and grouping tasks."""

__version__ = "0.1.0"
