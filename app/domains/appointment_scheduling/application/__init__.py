"""Application layer: ports, DTOs, message contracts and use cases."""
