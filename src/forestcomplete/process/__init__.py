"""Running the forester executable."""
