"""Async SQLAlchemy engine and ORM tables."""
