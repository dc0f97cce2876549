"""Services - imperative shell around the pure cafe rules in core/.

Invariants:
    - Services own IO (database); rules and ordering stay in core/
"""
