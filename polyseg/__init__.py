"""Polymorphic collections that store elements in per-type segments, with helpers and a benchmark."""

__version__ = "0.1.0"