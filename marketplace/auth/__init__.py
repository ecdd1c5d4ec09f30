"""
Session authentication for customers and administrators.
"""
