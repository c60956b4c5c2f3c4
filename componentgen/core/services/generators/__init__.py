"""
Generators — produce source text from validated containers.

Each generator module exposes a ``generate_*()`` function that returns
a ``GeneratedSource``.
"""
