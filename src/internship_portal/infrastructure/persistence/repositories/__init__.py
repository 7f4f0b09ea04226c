"""SQLAlchemy repository implementations"""
