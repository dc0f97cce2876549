"""Declarative base and the seed loader for the cafes table."""
