"""Tests for the og_image_writer package."""
