"""
cerberus_platform package

User-account backend: registration, self-service profile management and
JWT bearer authentication with scope-gated endpoints.
"""
