"""
careerecon - economic time-series acquisition for career exploration.

Fetches BLS (Bureau of Labor Statistics) series with caching, retries and
request batching, and turns them into per-career economic indicators.
"""

__version__ = "0.1.0"
