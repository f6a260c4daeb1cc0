"""
Core utilities shared across the Conceptos API.

This package hosts the configuration helpers (env vars, paths, backend
selection), logging setup and the error taxonomy used by repositories,
services and routers.
"""
