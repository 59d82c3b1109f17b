"""DAO package."""
