"""Parameter objects, one class per Backlog API operation."""
