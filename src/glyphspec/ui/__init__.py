"""User interfaces built on top of the glyph specification pipeline."""
