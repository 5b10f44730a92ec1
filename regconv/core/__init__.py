"""Register decoder core: data type taxonomy and conversion."""

__version__ = "1.0.0"
