"""Service layer — scheme resolution, command building, dispatch."""
