"""lh-audit - Lighthouse report analysis and fix suggestions."""

__version__ = "0.1.0"
