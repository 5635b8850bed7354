"""Names of the view properties the core reads and writes on host nodes."""

# Cosmetics carried over from a template's content root, each independently
BACKGROUND_COLOR = "backgroundColor"
FOREGROUND_COLOR = "foregroundColor"
TEXT_FONT = "textFont"
TEXT_SIZE = "textSize"
TEXT_STYLE = "textStyle"

COSMETIC_PROPERTIES = (
    BACKGROUND_COLOR,
    FOREGROUND_COLOR,
    TEXT_FONT,
    TEXT_SIZE,
    TEXT_STYLE,
)

# Identity toggles re-applied on every sync
SELECT_GROUPED_CONTROLS = "selectGroupedControls"
CLIPPING = "clipping"

# Baseline applied to freshly created instances
SHOW_BORDER = "showBorder"
MARGINS = "margins"
OPAQUE = "opaque"
