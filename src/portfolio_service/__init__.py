"""Portfolio Service - portfolios, skill catalog and category moderation."""

__version__ = "0.1.0"
