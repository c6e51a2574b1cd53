"""Write operations (CQRS commands), grouped by component."""
