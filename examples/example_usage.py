"""Example: drive the engine through the service layer (no Flask).

Two scans of the same day are merged per member, then a manual override
corrects one member and the monthly summary is exported.
"""

from datetime import date, datetime

from smart_attendance.container import build_container
from smart_attendance.recognition.model import Proposal


def main():
    container = build_container(storage_backend="memory")
    alice = container.roster_service.register("Alice")
    bob = container.roster_service.register("Bob")

    svc = container.attendance_service
    day = date(2024, 3, 1)
    svc.record_scan([Proposal(alice.person_id, True, 90)], day=day, image_ref="scan-1.jpg", now=datetime(2024, 3, 1, 8, 0))
    svc.record_scan(
        [Proposal(bob.person_id, True, 70)],
        day=day,
        image_ref="scan-2.jpg",
        adjustments={bob.person_id: "late"},
        now=datetime(2024, 3, 1, 8, 30),
    )

    summary = svc.dashboard(day).summary
    print(f"present={summary.present} late={summary.late} absent={summary.absent} total={summary.total}")

    svc.override(bob.person_id, day, "present")
    print(container.report_service.monthly_summary("2024-03").content)


if __name__ == "__main__":
    main()
