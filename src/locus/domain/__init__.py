"""Domain layer — pure models, error kinds, and value parsing.

Domain modules never perform I/O and never import from services,
infrastructure, commands, or output.
"""
