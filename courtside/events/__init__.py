"""Domain event types and the in-process event emitter."""
