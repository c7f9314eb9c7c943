"""Domain layer: entities, repository contracts, services and exceptions."""
