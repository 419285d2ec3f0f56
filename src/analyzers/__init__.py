"""Line-count analysis."""

from .cloc import ClocRunner, parse_cloc_report

__all__ = ["ClocRunner", "parse_cloc_report"]
