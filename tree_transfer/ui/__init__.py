"""UI-facing layer. Holds controllers only; no widget toolkit code."""
