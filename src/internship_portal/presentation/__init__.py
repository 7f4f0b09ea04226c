"""HTTP presentation layer"""
