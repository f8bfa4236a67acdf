"""Service layer: domain operations over the entity store."""
