# tests/property/__init__.py
"""Property-based tests for minish, driven by Hypothesis.

Hypothesis generates the inputs here (values to shrink, seeds, weight
lists); minish is the system under test. Keeping the two engines apart
means a bug in minish's own generation cannot hide itself.
"""
