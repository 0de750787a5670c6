"""
Seasonal palette reference data.

Curated best / neutral / avoid colours for each of the four seasons. These
tables are static; nothing here is derived from an input image.
"""
from enum import Enum
from typing import Dict, List, Tuple


class SeasonalPalette(str, Enum):
    """Seasonal colour-analysis families."""
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"


SEASON_ORDER: List[SeasonalPalette] = [
    SeasonalPalette.SPRING,
    SeasonalPalette.SUMMER,
    SeasonalPalette.AUTUMN,
    SeasonalPalette.WINTER,
]

# (name, hex, description)
Swatch = Tuple[str, str, str]

BEST_COLORS: Dict[SeasonalPalette, List[Swatch]] = {
    SeasonalPalette.SPRING: [
        ("Peach", "#FFD8B1", "Soft warm peach"),
        ("Coral", "#FF8370", "Bright warm coral"),
        ("Warm Yellow", "#FFD166", "Clear golden yellow"),
        ("Apple Green", "#80BD9E", "Fresh apple green"),
        ("Aqua", "#7FCDCD", "Clear light turquoise"),
        ("Periwinkle", "#98B6EB", "Light clear blue"),
        ("Salmon Pink", "#FF9A8D", "Warm pinkish coral"),
        ("Warm Red", "#E84A5F", "Clear tomato red"),
    ],
    SeasonalPalette.SUMMER: [
        ("Rose Pink", "#DBA1A1", "Soft muted rose"),
        ("Lavender", "#CBC5F9", "Soft muted purple"),
        ("Powder Blue", "#A3BBE3", "Soft blue with gray"),
        ("Sage Green", "#B2C9AB", "Muted soft green"),
        ("Mauve", "#C295A5", "Dusty rose pink"),
        ("Periwinkle", "#8F9FBC", "Muted blue-purple"),
        ("Soft Teal", "#7AA5A6", "Muted teal"),
        ("Raspberry", "#C25B7A", "Muted cool pink"),
    ],
    SeasonalPalette.AUTUMN: [
        ("Terracotta", "#C87C56", "Earthy warm orange"),
        ("Olive", "#8A8B60", "Muted yellow-green"),
        ("Rust", "#BF612A", "Deep orangey-brown"),
        ("Moss Green", "#606B38", "Deep muted green"),
        ("Teal", "#406A73", "Deep blue-green"),
        ("Bronze", "#C69F6A", "Warm metallic brown"),
        ("Tomato Red", "#AB3428", "Muted warm red"),
        ("Mustard", "#D2A54A", "Deep yellow-gold"),
    ],
    SeasonalPalette.WINTER: [
        ("Royal Purple", "#6A3790", "Rich blue-purple"),
        ("Ice Blue", "#78A4C0", "Clear cool blue"),
        ("Emerald", "#00A383", "Deep clear green"),
        ("Crimson", "#C91F37", "Bold blue-red"),
        ("Fuchsia", "#D33682", "Vivid cool pink"),
        ("Navy", "#1F3659", "Deep blue"),
        ("Ice Pink", "#F0A1BF", "Cool clear pink"),
        ("Bright Blue", "#0078BF", "Clear strong blue"),
    ],
}

NEUTRAL_COLORS: Dict[SeasonalPalette, List[Swatch]] = {
    SeasonalPalette.SPRING: [
        ("Camel", "#C8A77E", "Light warm tan"),
        ("Ivory", "#FFF8E7", "Warm off-white"),
        ("Navy", "#2F3E5F", "Slightly warm navy"),
        ("Soft White", "#F5F5DC", "Warm cream white"),
    ],
    SeasonalPalette.SUMMER: [
        ("Taupe", "#BCB6A8", "Cool light brown"),
        ("Soft White", "#F0EEE9", "Cool off-white"),
        ("Slate Gray", "#708090", "Medium blue-gray"),
        ("Soft Navy", "#39516D", "Muted navy"),
    ],
    SeasonalPalette.AUTUMN: [
        ("Chocolate", "#6B4226", "Deep warm brown"),
        ("Cream", "#F2E4C8", "Warm soft yellow-white"),
        ("Khaki", "#B09D78", "Muted yellow-brown"),
        ("Dark Brown", "#4A3728", "Rich warm brown"),
    ],
    SeasonalPalette.WINTER: [
        ("True White", "#FFFFFF", "Pure bright white"),
        ("Black", "#000000", "True black"),
        ("Charcoal", "#36454F", "Deep cool gray"),
        ("Silver Gray", "#C0C0C0", "Cool light gray"),
    ],
}

AVOID_COLORS: Dict[SeasonalPalette, List[Swatch]] = {
    SeasonalPalette.SPRING: [
        ("Black", "#000000", "Too harsh"),
        ("Burgundy", "#800020", "Too deep and cool"),
        ("Plum", "#673147", "Too cool and muted"),
        ("Cool Gray", "#BEBEBE", "Too cool-toned"),
    ],
    SeasonalPalette.SUMMER: [
        ("Orange", "#FF7F00", "Too warm and bright"),
        ("Bright Yellow", "#FFFF00", "Too bright and warm"),
        ("Camel", "#C19A6B", "Too warm"),
        ("Tomato Red", "#FF6347", "Too warm and bright"),
    ],
    SeasonalPalette.AUTUMN: [
        ("True White", "#FFFFFF", "Too stark"),
        ("Fuchsia", "#FF00FF", "Too cool and bright"),
        ("Icy Blue", "#A5F2F3", "Too cool and clear"),
        ("Bubblegum Pink", "#FFC1CC", "Too cool and bright"),
    ],
    SeasonalPalette.WINTER: [
        ("Cream", "#FFFDD0", "Too muted and warm"),
        ("Peach", "#FFE5B4", "Too warm and soft"),
        ("Camel", "#C19A6B", "Too warm and muted"),
        ("Moss Green", "#8A9A5B", "Too muted"),
    ],
}
