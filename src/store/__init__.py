"""Run report generation."""

from .output import OutputGenerator, summarize

__all__ = ["OutputGenerator", "summarize"]
