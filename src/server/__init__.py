"""HTTP service for sectionhtml."""
