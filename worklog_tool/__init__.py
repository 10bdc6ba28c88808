"""Work-report cost, income and budget summaries."""

__version__ = "1.0.0"
