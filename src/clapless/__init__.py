"""Clapless: synchronize local podcast recordings against a mixed source."""

__version__ = "0.3.0"
