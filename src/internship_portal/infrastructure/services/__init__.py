"""Document rendering adapters"""
