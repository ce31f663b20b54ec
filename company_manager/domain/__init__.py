"""Domain layer (pure game rules).

- Keep contract, employee, session and turn rules here.
- Avoid I/O: no DB sessions, no HTTP/FastAPI.
- Randomness and time are passed in as arguments (RandomProvider, ``now``).
"""
