"""Tree engine: node model, read-only navigation and structural mutation."""
