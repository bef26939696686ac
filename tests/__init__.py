"""
Test suite for the todo API.

This package contains:
- unit/: models, token codec, configuration and the authentication gate
- integration/: HTTP endpoints through the Flask test client
- security/: account-enumeration, leakage and token-handling checks
"""
