"""
Extract Layer - Raw Staging Input

This layer holds the raw employee rows exactly as they were read.
- No business logic
- Reads CSV / Parquet / JSON into a staging frame
- Staging is discarded once the canonical table is loaded
"""
