"""Larder: recipe API with a Redis cache-aside layer over a document store."""

__version__ = "0.1.0"
