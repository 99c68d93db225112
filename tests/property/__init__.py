# tests/property/__init__.py
"""Property-based tests for servergen.

Property-based testing validates invariants that must hold for ALL valid
graph documents, not just the examples we think of.

Test categories:
- core/: resolution and emission invariants
"""
