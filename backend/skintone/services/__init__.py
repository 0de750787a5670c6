"""
SkinTone analysis services: skin classification, face location, signatures,
undertone classification, consistency caching and palette mapping.
"""
