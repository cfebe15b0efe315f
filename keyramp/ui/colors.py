"""Theme colors and color utilities for the UI."""


class TrainerColors:
    """Light theme palette."""

    BG_TOP = "#eff6ff"
    BG_BOTTOM = "#e0e7ff"

    PRIMARY = "#4f46e5"
    PRIMARY_DARK = "#312e81"

    CARD_BG = "rgba(255, 255, 255, 0.92)"
    CARD_BORDER = "rgba(255, 255, 255, 0.6)"

    TEXT_PRIMARY = "#1f2937"
    TEXT_SECONDARY = "#4b5563"
    TEXT_MUTED = "#9ca3af"

    WPM = "#2563eb"
    ACCURACY = "#16a34a"
    SCORE = "#9333ea"
    TREND_UP = "#22c55e"
    TREND_DOWN = "#ef4444"

    # Lesson text board
    TYPED_CORRECT = "#16a34a"
    TYPED_WRONG = "#dc2626"
    TYPED_WRONG_BG = "#fee2e2"
    CURSOR_BG = "#bfdbfe"
    PENDING = "#9ca3af"

    # Letter tiles by confidence band
    FOCUS = "#f97316"
    UNCALIBRATED = "#9ca3af"
    LOW = "#ef4444"
    MEDIUM = "#eab308"
    HIGH = "#22c55e"
    LOCKED_BG = "#e5e7eb"
    LOCKED_TEXT = "#9ca3af"
    MARKER = "#fde047"


def confidence_color(confidence: float, is_focus: bool = False) -> str:
    """Tile color for a letter: focus first, then by confidence band."""
    if is_focus:
        return TrainerColors.FOCUS
    if confidence == 0:
        return TrainerColors.UNCALIBRATED
    if confidence < 0.3:
        return TrainerColors.LOW
    if confidence < 0.7:
        return TrainerColors.MEDIUM
    return TrainerColors.HIGH


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    try:
        a = a.strip()
        b = b.strip()
        if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
            return a
        t = max(0.0, min(1.0, float(t)))
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        r = int(ar + (br - ar) * t)
        g = int(ag + (bg - ag) * t)
        bl = int(ab + (bb - ab) * t)
        return f"#{r:02X}{g:02X}{bl:02X}"
    except ValueError:
        return a
