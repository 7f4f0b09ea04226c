"""Caller context and route authorization"""
