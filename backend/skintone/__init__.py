"""
SkinTone Palette Service

Skin undertone classification and seasonal colour palette recommendations
from a single portrait photo.
"""

__version__ = "1.0.0"
