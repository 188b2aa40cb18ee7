"""Infrastructure Layer - database, logging, token and password adapters.

Invariants:
    - Infrastructure implements core Protocols; core never imports from here
    - Driver and library errors are mapped to core/errors.py types at this boundary
"""
