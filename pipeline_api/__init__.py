"""Sales pipeline API: deals, end users, categories, users and change requests."""
