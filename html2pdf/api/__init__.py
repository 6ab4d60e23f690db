"""
FastAPI REST Endpoints
======================

REST API endpoints for HTTP access to HTML to PDF conversion.

Endpoints:
- GET /: Service information and health check
- POST /files: Convert an HTML string to a PDF file (direct download)
"""
