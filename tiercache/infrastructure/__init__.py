"""Infrastructure Layer: Contains concrete implementations and adapters.

Implements the interfaces defined in the domain layer: the memory and file
cache tiers, byte codecs, configuration loading, and logging setup.
"""
