"""
Service modules for vecstore.
"""
