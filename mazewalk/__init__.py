"""First-person walker through a generated 3D maze, with its maze, collision and scene logic."""

__version__ = "1.0.0"