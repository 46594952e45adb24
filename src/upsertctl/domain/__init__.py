"""Domain layer — records, selectors, tagged outcomes, and the store contract.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
