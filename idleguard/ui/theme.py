"""Colors for the back office window."""

from dataclasses import dataclass


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert hex color to RGB tuple.

    Args:
        hex_color: Hex color string (e.g., "#FFE4C4").

    Returns:
        RGB tuple.
    """
    hex_color = hex_color.lstrip("#")
    return tuple(int(hex_color[i : i + 2], 16) for i in (0, 2, 4))  # type: ignore[return-value]


@dataclass
class Theme:
    """Window and dialog colors."""

    background: str = "#F4F5F7"
    panel: str = "#FFFFFF"
    text: str = "#1F2937"
    muted: str = "#6B7280"
    primary: str = "#2563EB"
    destructive: str = "#DC2626"

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> "Theme":
        """Create from dictionary."""
        return cls(
            background=data.get("background", "#F4F5F7"),
            panel=data.get("panel", "#FFFFFF"),
            text=data.get("text", "#1F2937"),
            muted=data.get("muted", "#6B7280"),
            primary=data.get("primary", "#2563EB"),
            destructive=data.get("destructive", "#DC2626"),
        )
