"""Admin CLI for the Grading Service."""
