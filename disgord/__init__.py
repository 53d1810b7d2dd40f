"""Building blocks for Discord bots: rate limit buckets, message models, events and filters."""

__version__ = "0.1.0"