"""Visualization and plotting module for the hare report."""

from .plotter import HarePlotter

__all__ = ['HarePlotter']
