"""Services Layer - orchestrates validation, storage and the ownership gate.

Invariants:
    - Services receive their collaborators through the constructor
    - Services never import FastAPI
"""
