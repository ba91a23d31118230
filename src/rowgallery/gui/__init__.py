"""Qt integration for rowgallery."""
