"""Bitplane crumb compression for paletted PNG images, with size and crumb statistics commands."""

__version__ = "0.1.0"