"""
Shared module package.

Contains cross-cutting concerns used across bounded contexts:
- Typed results, pagination and page directives
- Error handling and the failure taxonomy
- Security middleware, authentication, rate limiting
- Logging configuration
"""
