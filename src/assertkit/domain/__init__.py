"""Domain layer — ordering domains, classification, and comparison.

This layer depends only on stdlib.
It must never import from assertions, config, output, or plugins.
"""
