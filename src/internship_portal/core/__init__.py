"""Core configuration, database and cross-cutting concerns"""
