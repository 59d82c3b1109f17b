"""Controllers package."""
