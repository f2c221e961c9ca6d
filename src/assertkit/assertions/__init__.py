"""Assertion layer — soft assertions that report through a Reporter.

Assertions may import from domain, config, and output.
INVARIANT: Assertions return a bool and never raise on a failed check.
"""
