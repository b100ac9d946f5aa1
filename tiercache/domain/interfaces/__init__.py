"""Domain Interfaces (Ports):

Defines the contracts (Abstract Base Classes) that infrastructure components
must implement: the cache tiers and the byte codecs they persist with.
"""
