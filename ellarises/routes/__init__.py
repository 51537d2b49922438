"""Blueprints for the Ella Rises site."""
