"""HTTP blueprints for the map API."""
