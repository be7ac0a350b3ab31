"""Readers for TREC-style run and z-score files, and per-topic retrieval evaluation measures."""

__version__ = "0.1.0"