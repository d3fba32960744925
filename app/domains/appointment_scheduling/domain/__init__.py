"""Domain layer: value objects, entities, events and the domain service."""
