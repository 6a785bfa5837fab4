"""Domain layer: todo model, id rules, file format and error taxonomy.

This layer depends only on stdlib, pydantic and ruamel.yaml.
It must never import from services, infrastructure, adapters, commands, or config.
"""
