"""
Server-rendered admin pages.
"""
