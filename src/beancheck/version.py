"""Version information for beancheck."""

__version__ = "0.3.0"
