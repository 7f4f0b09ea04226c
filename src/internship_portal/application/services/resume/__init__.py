"""Resume rendering port"""
