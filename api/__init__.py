"""HTTP API blueprints for the typing trainer."""
