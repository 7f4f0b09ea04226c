"""API v1 - routers, schemas and dependency wiring"""
