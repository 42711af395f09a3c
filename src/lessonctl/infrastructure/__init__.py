"""Infrastructure layer: filesystem, templates, and markup transforms.

This layer depends on stdlib and third-party libs (Jinja2, Markdown).
It may import domain types and errors, never services, commands, or output.
"""
