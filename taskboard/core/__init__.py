"""Core auth, security, logging and error types."""
