"""Milestone timeline: dated milestones from multilingual markdown notes."""

__version__ = "0.1.0"
