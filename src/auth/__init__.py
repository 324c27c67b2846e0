"""
Authentication module for the AVASOFT accounts API.

This module provides:
- User registration with a role-specific Patient or Professional record
- Login with JWT access tokens
- Two-phase password reset by email
- Bearer token authentication for protected routes
"""
