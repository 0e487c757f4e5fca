"""Typed runtime configuration (see ``deckart.config.settings``)."""
