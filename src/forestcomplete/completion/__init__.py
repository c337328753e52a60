"""Cross-reference completion."""
