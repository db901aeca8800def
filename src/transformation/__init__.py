"""
Transformation Layer - Pure, Deterministic Functions

This layer contains all business logic and data transformations.
- Pure functions (DataFrame in → DataFrame out)
- No I/O operations
- Unit testable
- Deterministic results
"""
