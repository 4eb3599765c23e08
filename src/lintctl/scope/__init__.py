"""Scope resolution — glob helpers, project descriptors, and the pattern resolver.

Everything here is pure path arithmetic except descriptor loading, which
reads ``pyproject.toml`` files.
"""
