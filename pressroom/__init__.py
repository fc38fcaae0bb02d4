"""Pressroom — edit Git-hosted document collections without Git."""

__version__ = "0.1.0"
