from dataclasses import dataclass, field
from typing import Optional


@dataclass
class SemesterWindow:
    start_date: Optional[str] = None  # Inclusive ISO date
    end_date: Optional[str] = None    # Inclusive ISO date

    @property
    def start_iso(self) -> str:
        return str(self.start_date or "")[:10]

    @property
    def end_iso(self) -> str:
        return str(self.end_date or "")[:10]

    @property
    def is_configured(self) -> bool:
        """Both bounds present as full ISO dates and start <= end."""
        start, end = self.start_iso, self.end_iso
        return len(start) == 10 and len(end) == 10 and start <= end


@dataclass
class StudentProfile:
    name: str = ""
    university: str = ""
    course: str = ""
    semester: int = 1
    department: Optional[str] = None
    section: Optional[str] = None
    roll_number: Optional[str] = None
    semester_window: SemesterWindow = field(default_factory=SemesterWindow)

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "university": self.university,
            "course": self.course,
            "semester": self.semester,
        }
        if self.department:
            data["department"] = self.department
        if self.section:
            data["section"] = self.section
        if self.roll_number:
            data["rollNumber"] = self.roll_number
        if self.semester_window.start_date:
            data["semesterStartDate"] = self.semester_window.start_date
        if self.semester_window.end_date:
            data["semesterEndDate"] = self.semester_window.end_date
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "StudentProfile":
        try:
            semester = int(data.get("semester") or 1)
        except (TypeError, ValueError):
            semester = 1
        return cls(
            name=str(data.get("name") or ""),
            university=str(data.get("university") or ""),
            course=str(data.get("course") or ""),
            semester=semester,
            department=data.get("department"),
            section=data.get("section"),
            roll_number=data.get("rollNumber", data.get("roll_number")),
            semester_window=SemesterWindow(
                start_date=data.get("semesterStartDate"),
                end_date=data.get("semesterEndDate"),
            ),
        )
