"""Defines the version of the og_image_writer package."""

__version__ = "0.1.0"
