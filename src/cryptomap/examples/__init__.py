"""Runnable usage examples."""
