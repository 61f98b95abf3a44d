from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LEAVE = "LEAVE"
    NONE = "NONE"

    @classmethod
    def parse(cls, value) -> "AttendanceStatus":
        """Lenient parse; anything unknown is NONE."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().upper())
        except ValueError:
            return cls.NONE


def _safe_int(value, fallback: int = 0) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return fallback


@dataclass
class AttendanceDay:
    date: str                       # ISO YYYY-MM-DD, one record per date
    total_classes: int
    attended_classes: int           # 0 <= attended <= total, enforced by the writer
    status: AttendanceStatus = AttendanceStatus.NONE
    leave_counted: Optional[bool] = None  # Only meaningful for LEAVE
    remark: str = ""
    proof_ref: str = ""             # Proof file name or URL

    @property
    def is_active(self) -> bool:
        """At least one class was recorded on this day."""
        return self.total_classes > 0

    @property
    def has_report(self) -> bool:
        return bool((self.remark or "").strip() or self.proof_ref)

    def to_dict(self) -> dict:
        """Serialise in the web app's camelCase backup shape."""
        data = {
            "date": self.date,
            "totalClasses": self.total_classes,
            "attendedClasses": self.attended_classes,
            "status": self.status.value,
        }
        if self.leave_counted is not None:
            data["leaveCounted"] = self.leave_counted
        if self.remark:
            data["remark"] = self.remark
        if self.proof_ref:
            data["proofRef"] = self.proof_ref
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceDay":
        leave_counted = data.get("leaveCounted", data.get("leave_counted"))
        return cls(
            date=str(data.get("date") or "")[:10],
            total_classes=_safe_int(data.get("totalClasses", data.get("total_classes"))),
            attended_classes=_safe_int(data.get("attendedClasses", data.get("attended_classes"))),
            status=AttendanceStatus.parse(data.get("status")),
            leave_counted=None if leave_counted is None else bool(leave_counted),
            remark=str(data.get("remark") or ""),
            proof_ref=str(data.get("proofRef") or data.get("proofUrl") or data.get("proof_ref") or ""),
        )
