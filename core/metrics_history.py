from __future__ import annotations

from typing import Any, Dict, List, Sequence

from core.models import Report, Role


def visible_reports(reports: Sequence[Report], role: Role, unit: str) -> List[Report]:
    """Admins see every unit's reports; users only their own unit's."""
    if role == Role.ADMIN:
        return list(reports)
    return [r for r in reports if r.unit_name == unit]


def search_reports(reports: Sequence[Report], text: str) -> List[Report]:
    q = (text or "").strip()
    if not q:
        return list(reports)
    q_lower = q.lower()
    return [r for r in reports if q_lower in r.project_name.lower() or q in r.report_date]


def progress_band(progress: int) -> str:
    # 0-20 low, 21-49 medium, 50-99 high, 100 complete
    if progress == 100:
        return "complete"
    if progress >= 50:
        return "high"
    if progress > 20:
        return "medium"
    return "low"


def compute_history(reports: Sequence[Report], *, role: Role, unit: str, text: str = "") -> Dict[str, Any]:
    rows = search_reports(visible_reports(reports, role, unit), text)
    return {
        "count": len(rows),
        "rows": [
            {**r.to_dict(), "recorder_name": r.recorder_name, "progress_band": progress_band(r.progress_percent)}
            for r in rows
        ],
    }
