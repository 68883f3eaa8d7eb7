"""Cleanup engine internals."""
