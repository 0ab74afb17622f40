"""
security/ - Credentials
=======================
Password hashing and session-token signatures.
"""
