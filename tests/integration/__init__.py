"""API integration tests."""
