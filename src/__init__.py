"""AVASOFT accounts API."""
