"""Shared constants — single source of truth for cross-module values.

All magic strings and numbers that appear in 2+ files belong here.
StrEnum members are str-compatible, so log lines and JSON dumps of
matches and candidates work unchanged.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class MatchKind(StrEnum):
    """How a source match relates to the inspected type."""

    DEFINITION = "definition"  # class Foo extends ...
    INSTANTIATION = "instantiation"  # Foo(...)
    CONST_INSTANTIATION = "const_instantiation"  # const Foo(...)


class CornerZone(StrEnum):
    """Where a click landed relative to a candidate's corners."""

    CENTER = "center"
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"


class MatchBasis(StrEnum):
    """How a match was chosen among the sites for its type name."""

    UNIQUE = "unique"  # only site for the name
    CREATION_HINT = "creation_hint"  # pinned by a framework location hint
    CHAIN = "chain"  # picked among several by ancestor chain
    CONTEXT = "context"  # strictly best path/location score across files
    AMBIGUOUS = "ambiguous"  # several equally good sites, first seen wins


class MatchQuality(StrEnum):
    """Trust label for a resolved source match."""

    EXACT = "exact"
    APPROXIMATE = "approximate"
    GUESS = "guess"
    DEGRADED = "degraded"  # boundary ran to end-of-text


# ── Confidence Values ────────────────────────────────────


class Confidence:
    """Named confidence values — relative ranking signals, not probabilities."""

    UNAMBIGUOUS = 1.0  # Single occurrence or class definition
    CROSS_FILE_BASE = 0.9  # Any occurrence found in a cross-file sweep
    CHAIN_DISAMBIGUATED = 0.8  # Picked among several by ancestor chain
    FALLBACK_FIRST = 0.5  # Several occurrences, no evidence, first wins
    EXACT_THRESHOLD = 0.95
    HIGH_THRESHOLD = 0.8
    GUESS_THRESHOLD = 0.5


class Boost:
    """Additive context boosts applied by the cross-file scoring pass."""

    AREA_KEYWORD = 0.5  # Ancestor chain and path share a domain area
    LOCATION_KEYWORD = 0.3  # UI location hint and path share a keyword
    DEFINITION = 0.3  # Class definitions beat instantiations
    CONVENTIONAL_DIR = 0.2  # Path sits under a widget/screen directory


# ── Source Correlation ───────────────────────────────────

ANCESTOR_CHAIN_CAP = 10
SNIPPET_MAX_CHARS = 120
PROPERTY_EXCLUDED_KEYS = frozenset({"child", "children"})
CONST_KEYWORD = "const"

# Ancestor-chain token → path fragment. A boost applies when the joined,
# lowercased chain contains the token and the lowercased path contains the
# fragment.
AREA_KEYWORDS: dict[str, str] = {
    "filetree": "file_tree",
    "editor": "editor",
    "preview": "preview",
    "terminal": "terminal",
    "assistant": "assistant",
}

LOCATION_KEYWORDS = ("panel", "screen")

CONVENTIONAL_DIRS = ("lib/widgets/", "lib/screens/")

# ── Specificity Scoring ──────────────────────────────────

AREA_SCORE_NUMERATOR = 10_000.0
AREA_WEIGHT = 0.5
CENTER_WEIGHT = 0.3
SEMANTIC_BONUS = 0.2

CORNER_ZONE_RATIO = 0.15
CORNER_ZONE_MIN = 12.0
CORNER_ZONE_MAX = 24.0

PRIVATE_TYPE_PREFIX = "_"

# Structural/plumbing element types that are never user-selectable.
INTERNAL_TYPE_NAMES = frozenset({
    "Semantics", "MergeSemantics", "BlockSemantics", "ExcludeSemantics",
    "Actions", "Focus", "FocusScope", "FocusTrap", "FocusTraversalGroup",
    "Shortcuts", "PrimaryScrollController", "ScrollConfiguration",
    "NotificationListener", "RepaintBoundary", "IgnorePointer",
    "AbsorbPointer", "MetaData", "KeyedSubtree", "Offstage", "TickerMode",
    "MediaQuery", "DefaultTextStyle", "DefaultTextHeightBehavior",
    "IconTheme", "AnimatedBuilder", "ListenableBuilder",
    "ValueListenableBuilder", "StreamBuilder", "FutureBuilder",
    "Builder", "StatefulBuilder", "LayoutBuilder", "OrientationBuilder",
    "CustomPaint", "RawGestureDetector", "Listener", "MouseRegion",
})

# Element types a user is likely to mean when clicking.
USER_FACING_TYPE_NAMES = frozenset({
    "Text", "RichText", "Icon", "Image", "Container", "DecoratedBox",
    "Card", "ListTile", "AppBar", "Scaffold", "FloatingActionButton",
    "ElevatedButton", "TextButton", "OutlinedButton", "IconButton",
    "TextField", "TextFormField", "Checkbox", "Radio", "Switch",
    "Slider", "DropdownButton", "PopupMenuButton", "Chip", "Avatar",
    "CircleAvatar", "Badge", "Tooltip", "SnackBar", "Dialog",
    "AlertDialog", "BottomSheet", "Drawer", "NavigationBar",
    "NavigationRail", "TabBar", "Tab", "DataTable", "PaginatedDataTable",
    "GridView", "ListView", "SingleChildScrollView", "CustomScrollView",
    "SizedBox", "Padding", "Center", "Align", "Expanded", "Flexible",
    "Spacer", "Row", "Column", "Stack", "Positioned", "Wrap", "Flow",
})

# ── Instance Tracking ────────────────────────────────────

BOUNDS_TOLERANCE = 1.0
UNIQUE_ID_HASH_CHARS = 6

# ── Ingestion ────────────────────────────────────────────

BINARY_DETECTION_BUFFER = 8192
DEFAULT_SOURCE_EXTENSIONS = (".dart",)
DEFAULT_SKIP_DIRECTORIES = (
    "build",
    ".dart_tool",
    ".pub-cache",
    "node_modules",
    ".git",
    ".idea",
    "ios",
    "android",
)
