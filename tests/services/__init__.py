"""Service layer tests."""
