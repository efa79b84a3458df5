"""Repository layer for Predial.

Provides the read protocol the engines depend on, an in-memory store that
satisfies it, and a YAML loader that fills the store from the
administrative rate tables.
"""
