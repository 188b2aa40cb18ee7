"""Pydantic Schemas - request decoding, response shapes and record rule tables.

Invariants:
    - Request models carry plain types with zero-value defaults; field rules
      live in the RecordSchema declared next to each model
    - Record schemas are declared at import, so a malformed tag fails startup

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
