"""Infrastructure layer: filesystem I/O, locking, and the file-backed repository.

This layer may import from domain.  It must never import from services,
adapters, commands, or output.
"""
