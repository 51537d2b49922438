"""Session identity binding and access control for the UI routes."""
