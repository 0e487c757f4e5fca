"""
Core infrastructure for Deck Art Mirror.

Logging setup shared by every pipeline stage.
"""
