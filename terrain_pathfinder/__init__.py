"""A* route planning over image-derived terrain maps."""
