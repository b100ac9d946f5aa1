"""Core Application Layer: wires cache tiers for calling code.

Contains the configuration-driven cache factory and the function result
caching decorator.
"""
