"""Implementation modules for the Grading Service."""
