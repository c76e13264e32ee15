"""
Security test suite for the Bookmarks API.

This module contains security-focused tests that validate:
- Authentication enforcement on every protected endpoint
- Authorization (IDOR protection) between accounts
- Secrecy of the stored password hash
"""
