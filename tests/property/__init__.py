# tests/property/__init__.py
"""Property-based tests for flowkit.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of.

Test categories:
- core/: workflow normalization and dataset chunking invariants
"""
