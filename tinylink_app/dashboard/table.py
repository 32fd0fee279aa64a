from typing import Dict, Iterable, List, Optional

EMPTY_CELL = "-"
COUNTER_FIELDS = ("clicks", "last_clicked")


def filter_rows(rows: Iterable[Dict], query: Optional[str]) -> List[Dict]:
    """Case-insensitive substring match against code and url"""
    q = (query or "").strip().lower()
    if not q:
        return list(rows)
    return [
        row for row in rows
        if q in row["code"].lower() or q in row["url"].lower()
    ]


class LinkTable:
    """
    Rendered dashboard rows keyed by code.

    render() replaces every row; patch_counters() only touches the click
    count and last-clicked cells of rows already on screen, so the live
    refresh never rebuilds the table.
    """

    def __init__(self):
        self.rows: Dict[str, Dict] = {}

    def render(self, rows: Iterable[Dict], query: Optional[str] = None) -> List[Dict]:
        self.rows = {row["code"]: dict(row) for row in filter_rows(rows, query)}
        return self.visible_rows

    @property
    def visible_rows(self) -> List[Dict]:
        return list(self.rows.values())

    def patch_counters(self, rows: Iterable[Dict]) -> List[str]:
        """Update counter cells of rendered rows; return the codes that changed"""
        changed = []
        for row in rows:
            rendered = self.rows.get(row["code"])
            if rendered is None:
                continue
            updates = {field: row.get(field) for field in COUNTER_FIELDS}
            if any(rendered.get(field) != value for field, value in updates.items()):
                rendered.update(updates)
                changed.append(row["code"])
        return changed

    def format(self) -> str:
        """Plain text rendering for terminals"""
        if not self.rows:
            return "No links found."
        header = ("CODE", "URL", "CLICKS", "LAST CLICKED")
        lines = [header] + [
            (
                row["code"],
                row["url"],
                str(row["clicks"]),
                row.get("last_clicked") or EMPTY_CELL,
            )
            for row in self.rows.values()
        ]
        widths = [max(len(line[i]) for line in lines) for i in range(len(header))]
        return "\n".join(
            "  ".join(cell.ljust(width) for cell, width in zip(line, widths)).rstrip()
            for line in lines
        )
