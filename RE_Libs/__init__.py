"""
RE_Libs - Raster Edit Library Modules

This package contains core functionality for the Raster Edit project,
organized into specialized sub-packages:

- ImageEditingLib: The single-buffer image editor and the transforms it runs
- RecipeLib: Operation registry and JSON edit recipes
"""

__version__ = "0.1.0"
