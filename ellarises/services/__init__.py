"""Integrations with the site database and password hashing."""
