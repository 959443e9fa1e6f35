"""Infrastructure adapters: persistence, email and file storage."""
