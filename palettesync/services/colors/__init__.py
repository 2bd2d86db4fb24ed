"""
PaletteSync Colors Module

Provides palette extraction (pixel sampling, k-means and median-cut
quantization, style ordering), color harmonies, theme derivation, palette
editing and theme exporters.
"""
