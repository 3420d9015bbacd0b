"""One Monokai colors for The Todo terminal front end.

Components import these constants and interpolate them into their CSS
with f-strings, so the palette is defined in one place.
"""

# ============================================================================
# BASE COLORS
# ============================================================================

BACKGROUND = "#272822"  # Main application background (dark charcoal)
FOREGROUND = "#F8F8F2"  # Primary text color (off-white)
SELECTION = "#49483E"   # Highlighted item background (medium gray)
COMMENT = "#75715E"     # Secondary/dimmed text (muted brown-gray)
BORDER = "#3E3D32"      # Borders and dividers (dark gray-green)

# ============================================================================
# ACCENT AND STATUS COLORS
# ============================================================================

ACCENT = "#66D9EF"          # Focus borders and open todos (cyan)
COMPLETE_COLOR = "#75715E"  # Completed todos (matches COMMENT)
PENDING_COLOR = "#E6DB74"   # Todos with a request in flight (yellow)
ERROR_COLOR = "#F92672"     # Error messages (pink/red)
HOVER_OPACITY = "20"        # Hover effect transparency (hex: ~12% opacity)


def with_alpha(color: str, alpha: str) -> str:
    """Add alpha transparency to a hex color.

    Args:
        color: Base hex color string (e.g., '#272822')
        alpha: Alpha value as 2-digit hex string (00-FF)

    Returns:
        Color with alpha channel appended (8-digit hex color code).

    Examples:
        >>> with_alpha(SELECTION, HOVER_OPACITY)
        '#49483E20'
    """
    return f"{color}{alpha}"
