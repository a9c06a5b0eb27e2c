"""Tests for the Starving Artist engine."""
