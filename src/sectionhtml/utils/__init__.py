"""Shared utilities for sectionhtml."""
