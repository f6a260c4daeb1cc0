"""
Conceptos API.

Small FastAPI service exposing CRUD and search over "conceptos" (named text
records with a description), persisted either in a JSON file or in a SQL table.
"""

__version__ = "1.0.0"
