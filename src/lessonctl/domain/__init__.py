"""Domain layer: blocks, documents, parsing, and validation rules.

This layer depends only on stdlib and ruamel.yaml.
It must never import from services, infrastructure, commands, or config.
"""
