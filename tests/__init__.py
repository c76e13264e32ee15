"""Test suite for the Bookmarks API."""
