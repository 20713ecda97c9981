"""Test suite package marker to ensure deterministic module names."""

# Nested test directories carry no ``__init__`` of their own, so every test
# module basename must be unique across the tree.
