"""Auction draft assistant: role-relative scoring, budget caps and bid suggestions."""

__version__ = "0.1.0"
