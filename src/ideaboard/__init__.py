"""Ideaboard: community board API for questions, ideas and discussions."""

__version__ = "0.1.0"
