"""Cafe API package: JSON listing and creation of cafes.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
