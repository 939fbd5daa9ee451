"""A small JSON document model with memory-accounting buffers, a lenient parser and compact or indented output."""

__version__ = "0.1.0"

__all__ = ["buffer", "containers", "parser", "variant", "writer"]