"""Bricksy backend: registration, login and bearer-token sessions."""
