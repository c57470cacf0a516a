"""Resource service: persistence and query layer for a single resource type."""
