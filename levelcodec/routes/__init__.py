"""HTTP blueprints: codec endpoints and per-owner level storage."""
