"""
Service layer abstraction.

Each service encapsulates the store access for a domain so that API
handlers never issue queries themselves.
"""
