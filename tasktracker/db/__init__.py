"""Database Declarations - SQLAlchemy Base shared by models and migrations."""
