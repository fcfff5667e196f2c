"""
Defaults and fixed vocabularies for sweep ingestion and export.
"""

# ─── Extraction defaults (no BEGIN/END block) ───────────────────────────────
DEFAULT_SKIP_ROWS = 6          # rows before the first data row
DEFAULT_MAX_ROWS = 1001        # data rows read after skipping

# ─── Data block markers ─────────────────────────────────────────────────────
BEGIN_MARKER = "BEGIN"
END_MARKER = "END"

# ─── Header matching (substrings, lower-case) ───────────────────────────────
FREQ_CANDIDATES = ("freq", "hz")
S11_CANDIDATES = ("s11", "db(s(1,1))")
S21_CANDIDATES = ("s21", "db(s(2,1))")

# ─── Delimiters considered when sniffing a file ─────────────────────────────
SNIFF_DELIMITERS = ",;\t|"

# ─── Export ─────────────────────────────────────────────────────────────────
EXPORT_FREQ_HEADER = "Frequency(Hz)"
EXPORT_COLUMN_SUFFIX = "_CompensatedS21(dB)"
EXPORT_DECIMALS = 6
EXPORT_FILENAME = "Compensated_S21_Analysis.csv"

# ─── Plotting ───────────────────────────────────────────────────────────────
GHZ_DECIMALS = 3
SERIES_COLORS = (
    "#2563eb", "#06b6d4", "#10b981", "#f59e0b",
    "#ef4444", "#6366f1", "#ec4899", "#8b5cf6",
)


def series_color(index: int) -> str:
    """Palette colour for the index-th series (wraps around)."""
    return SERIES_COLORS[index % len(SERIES_COLORS)]
