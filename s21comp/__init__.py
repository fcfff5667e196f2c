"""
S21 Compensator: reflection-loss de-embedding of VNA sweep exports.

Parses network-analyzer CSV exports, aligns them against a reference
measurement and produces compensated S21 curves for plotting and export.
"""

__version__ = "0.1.0"
