"""
Image upload relay to managed object storage.
"""
