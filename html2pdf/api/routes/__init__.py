"""
API Routes
==========

Routers included by the application factory.
"""
