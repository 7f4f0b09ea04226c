"""Authentication services"""
