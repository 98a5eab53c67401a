"""Constants shared across the Grading Service."""

SERVICE_NAME = "grading_service"

GRADING_SYSTEM_RESOURCE = "GradingSystem"

CUSTOM_SYSTEM_NAME = "Custom Grading System"
CUSTOM_SYSTEM_DESCRIPTION = "Custom institution-specific grading system"
