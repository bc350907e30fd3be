"""
Shared service utilities.

- http.py - ``requests`` session with default timeout, User-Agent and retries
"""
