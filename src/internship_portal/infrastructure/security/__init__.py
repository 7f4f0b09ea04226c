"""Token signing and password hashing"""
