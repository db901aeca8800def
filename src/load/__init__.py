"""
Load Layer - Data Persistence

This layer moves data into its persistent homes.
- Raw staging -> canonical employee table (with staging discarded)
- Local file storage (Parquet, JSON)
- DuckDB database file for the dashboard
"""
