"""Repository ports"""
