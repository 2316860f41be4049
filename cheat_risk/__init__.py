"""
Cheat Risk Analyzer Application Package.

This package scores chess.com players for cheat risk from their public
statistics and exposes the scoring engine through a small HTTP API.
"""

__version__ = "0.1.0"
