"""Adapters: the record shape exposed to outer surfaces and the manager facade.

Adapters may import from domain, infrastructure and services.  They must
never import from commands or output.
"""
