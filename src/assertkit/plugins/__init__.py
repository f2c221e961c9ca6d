"""Extension layer — pytest integration.

Registered through the ``pytest11`` entry point, so installing assertkit is
enough to make the ``reporter`` fixture available.
"""
