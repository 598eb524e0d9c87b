"""Models — enums, schemas and the per-call pipeline state."""
