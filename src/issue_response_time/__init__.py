"""Maintainer first-response time reporting for community GitHub issues."""

__version__ = "0.1.0"
