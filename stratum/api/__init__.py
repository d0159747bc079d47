"""HTTP adapter for the settings manager."""
