"""Parsing and financial-aggregation core for a Vietnamese point-of-sale app."""

__version__ = "0.1.0"
