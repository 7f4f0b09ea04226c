"""Relational persistence"""
