"""Transport, logging and error handling utilities."""
