"""Service layer — the conditional stages and their store-bound wrappers.

Services may import from domain and infrastructure layers.
They must never import from commands, output, or config.
"""
