"""Versioned REST API"""
