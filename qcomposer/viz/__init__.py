"""Visualization feed for external renderers."""

from .feed import VisualizationFeed, build_feed, print_feed

__all__ = ["VisualizationFeed", "build_feed", "print_feed"]
