"""Request controllers for the Ella Rises site."""
