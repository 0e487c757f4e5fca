"""
Deck Art Mirror.

Keeps a local folder of color-bordered card images in sync with every card
referenced by a Moxfield user's decks.
"""

__version__ = "1.0.0"
