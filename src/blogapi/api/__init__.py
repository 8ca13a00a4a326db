"""HTTP blueprints for the blog API."""
