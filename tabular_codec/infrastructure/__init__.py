"""Infrastructure layer for the tabular codec.

This layer contains the format readers and writers, the service adapters and
logging. It implements the ports defined in the application layer.
"""

__all__ = []
