"""
PaletteSync

Color palette extraction from images and UI/brand theme derivation.
"""

__version__ = "1.0.0"
