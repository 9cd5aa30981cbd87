"""nocode-index: normalizes editor-specific content property values into
filter and sort index fields."""

__version__ = "0.1.0"
