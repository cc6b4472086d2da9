"""Monero explorer building blocks: options, emission monitor, transaction summaries and helpers."""

__version__ = "0.1.0"