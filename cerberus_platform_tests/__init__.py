"""
Tests for the cerberus_platform account service.

- JWT issuance, parsing and validation (`test_jwt_utility.py`)
- Scope guards (`test_security.py`)
- `/users`, `/auth/login` and health endpoints
- Account event logging and database initialization
"""
