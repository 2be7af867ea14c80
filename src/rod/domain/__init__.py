"""Domain layer — color scheme types.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
