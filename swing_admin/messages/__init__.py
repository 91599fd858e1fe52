"""
In-app message campaigns (read-only listing and summary stats).
"""
