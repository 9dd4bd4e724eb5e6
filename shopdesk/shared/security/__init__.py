"""Security concerns: headers, authentication and rate limiting."""
