"""Milestone timeline extraction package."""
