"""
Tab group color tags and their display colors.

The grouping engine deals in tags only. Hex values are for editors and
pickers that show a concrete color to the user.
"""
COLORS = ['grey', 'blue', 'green', 'red', 'orange', 'purple', 'yellow', 'pink']

COLOR_TO_HEX = {
    'grey': '#666666',
    'blue': '#1E88E5',
    'green': '#43A047',
    'red': '#E53935',
    'orange': '#FB8C00',
    'purple': '#8E24AA',
    'yellow': '#FFD700',
    'pink': '#FF69B4',
}

HEX_TO_COLOR = {value: key for key, value in COLOR_TO_HEX.items()}

DEFAULT_COLOR = 'grey'


def is_valid_color(color: str) -> bool:
    return color in COLOR_TO_HEX


def color_to_hex(color: str) -> str:
    return COLOR_TO_HEX[color]


def color_from_hex(hex_value: str) -> str:
    return HEX_TO_COLOR.get(hex_value.strip().upper(), DEFAULT_COLOR)


def parse_color(value: str) -> str:
    """Accept either a tag ("blue") or a hex value ("#1E88E5")."""
    value = value.strip()
    if value.startswith('#'):
        return color_from_hex(value)
    value = value.lower()
    if value == 'gray':
        value = 'grey'
    return value if is_valid_color(value) else DEFAULT_COLOR
