"""Community site backend: cache layer and operator API."""
