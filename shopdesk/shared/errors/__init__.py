"""
Shared error handling package.

Centralizes error-to-HTTP mapping so that domain failures and
unexpected errors are consistently translated into responses.
"""
