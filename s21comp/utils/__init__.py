"""Shared helpers: unit conversions and default constants."""
