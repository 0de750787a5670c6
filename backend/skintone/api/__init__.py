"""SkinTone HTTP routes."""
