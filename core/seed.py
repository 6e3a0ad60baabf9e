"""Built-in demo data served when the tracker endpoint is unreachable and nothing is cached."""

from __future__ import annotations

from typing import List

from core.config import UNITS
from core.models import Project, Report


SEED_PROJECTS: List[Project] = [
    Project(
        project_id="P001",
        project_name="โครงการพัฒนาศักยภาพกำลังพล รุ่นที่ 1",
        unit_name=UNITS[0],
        start_date="2025-10-01",
        end_date="2025-12-31",
        budget=500000,
    ),
    Project(
        project_id="P002",
        project_name="ระบบฐานข้อมูลกำลังพลดิจิทัล",
        unit_name=UNITS[1],
        start_date="2026-01-01",
        end_date="2026-09-30",
        budget=1200000,
    ),
    Project(
        project_id="P003",
        project_name="การฝึกอบรมภาษาอังกฤษสำหรับทหาร",
        unit_name=UNITS[3],
        start_date="2025-11-01",
        end_date="2026-02-28",
        budget=300000,
    ),
]

SEED_REPORTS: List[Report] = [
    Report(
        report_id="R001",
        project_id="P001",
        project_name="โครงการพัฒนาศักยภาพกำลังพล รุ่นที่ 1",
        unit_name=UNITS[0],
        report_date="2025-10-15",
        past_result="ดำเนินการติดต่อวิทยากรเรียบร้อยแล้ว",
        next_plan="เตรียมสถานที่และเอกสารประกอบการอบรม",
        progress_percent=20,
        problems="-",
        note="",
        created_at="2025-10-15T10:00:00Z",
    ),
    Report(
        report_id="R002",
        project_id="P002",
        project_name="ระบบฐานข้อมูลกำลังพลดิจิทัล",
        unit_name=UNITS[1],
        report_date="2026-02-01",
        past_result="ออกแบบ ER Diagram เสร็จสิ้น",
        next_plan="เริ่มพัฒนาส่วน Backend",
        progress_percent=45,
        problems="Server มีความล่าช้าในการจัดซื้อ",
        note="ต้องเร่งรัดพัสดุ",
        created_at="2026-02-01T14:30:00Z",
    ),
]
