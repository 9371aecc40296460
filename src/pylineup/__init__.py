"""Batting order and fielding chart generation for recreational teams."""

__version__ = "0.1.0"
