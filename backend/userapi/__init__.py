"""
User API — Application Package Initializer
===========================================

What: Marks the `userapi` directory as a Python package.
Why:  Enables module imports like `from userapi.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service is three thin layers composed linearly per request:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Controller)       │  ← wire ↔ document translation
    ├─────────────────────────────────────┤
    │      Database (Document Store)      │  ← MongoDB collection access
    └─────────────────────────────────────┘

    Schemas describe the JSON contract; identifiers.py is the only place
    that knows the store's native identifier type.
"""

__version__ = "1.0.0"
