"""Picture list localizer."""
