"""locus — Git-aware Markdown task tracker."""

__version__ = "0.1.0"
