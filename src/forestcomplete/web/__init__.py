"""HTTP bridge for editors."""
