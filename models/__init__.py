"""Data types and utility functions.

This package contains:
- types: TypedDicts for credentials, discovered bridges and resource summaries
- utils: Utility functions (resource_name, find_service_rid, similarity matching)
"""
