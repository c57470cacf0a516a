"""HTTP transport for the resource service."""
