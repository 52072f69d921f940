"""Catalog data and loading."""
