"""Domain layer (pure logic).

- Keep offer classification and transaction-line rules here.
- Avoid I/O: no DB sessions, no HTTP/FastAPI, no file reads.
- Prefer deterministic functions (identifiers and time passed in as arguments).
"""
