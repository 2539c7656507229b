"""SQL rendering for generated CRUD metadata."""
