"""Tests for configuration, passwords, tokens, and auth dependencies."""
