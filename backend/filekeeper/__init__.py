"""Local file and folder manager backed by an embedded key-value store."""
