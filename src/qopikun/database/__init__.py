"""Database schema, initialization and demo data."""
