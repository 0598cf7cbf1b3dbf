"""Embedding and similarity ranking."""
