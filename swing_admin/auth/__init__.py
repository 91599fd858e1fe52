"""
Admin authentication: verifies backend-issued access tokens.
"""
