"""Test fixtures for beancheck."""
