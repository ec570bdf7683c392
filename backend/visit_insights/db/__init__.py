"""Database base, session and schema helpers."""
