"""
Data Models
===========

Pydantic models for conversion requests, rendered documents and API responses.
"""
