"""Data layer - schemas and store interfaces."""
