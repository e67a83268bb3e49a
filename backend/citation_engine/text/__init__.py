"""Text normalization: provision content cleaning and search query sanitizing."""
