"""Estimate gift dimensions from a photo and plan the wrapping paper."""

__version__ = "0.1.0"
