"""Service layer: todo lifecycle on top of a repository.

Services may import from domain.  They receive their repository at
construction time and must never import from adapters, commands, or output.
"""
