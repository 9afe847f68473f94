"""Persistence: async SQLAlchemy engine, catalog ORM models, read repository."""
