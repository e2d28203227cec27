"""Fibonacci moving-average and KD signal engine for Taiwan-listed equities."""

__version__ = "1.0.0"
