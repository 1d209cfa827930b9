"""
Academy store: academies with their coaches and photo gallery, students,
attendance marks and certificates.
"""
from typing import Iterable, List, Optional

from courtside.data.models import Academy, Attendance, Certificate, Coach, Student
from courtside.domain.base_store import DomainStore
from courtside.utils.identifiers import generate_id


class AcademyStore(DomainStore):
    """Academies and their students.

    Photos are a feed: ``add_photo`` puts the newest first. Every other
    collection keeps insertion order.
    """

    name = "academies"

    def __init__(
        self,
        academies: Iterable[Academy] = (),
        students: Iterable[Student] = (),
    ):
        super().__init__()
        self._academies = self._repository("academies", id_prefix="academy")
        self._students = self._repository("students", id_prefix="student")
        self._attendance = self._repository("attendance", key=lambda a: (a.student_id, a.date))
        self._certificates = self._repository("certificates", id_prefix="cert")
        self._academies.set_all(academies)
        self._students.set_all(students)

    # --- Academy ---

    def add_academy(self, academy: Academy) -> Academy:
        return self._academies.add(academy)

    def get_academies(self) -> List[Academy]:
        return self._academies.list()

    def get_academy_by_id(self, academy_id: str) -> Optional[Academy]:
        return self._academies.get_by_id(academy_id)

    def clear_academies(self) -> None:
        self._academies.clear()

    def update_academy(self, academy: Academy) -> Optional[Academy]:
        """Replace the academy with the same id; unknown ids are ignored."""
        changes = academy.field_values()
        if not changes.get("created_at"):
            changes.pop("created_at", None)
        return self._academies.update(academy.id, changes)

    def delete_academy(self, academy_id: str) -> bool:
        """Remove an academy. Its students and certificates are kept."""
        return self._academies.delete(academy_id)

    # --- Students ---

    def add_student(self, student: Student) -> Student:
        return self._students.add(student)

    def get_students_by_academy(self, academy_id: str) -> List[Student]:
        return self._students.query(academy_id=academy_id)

    # --- Attendance ---

    def mark_attendance(self, student_id: str, date: str, present: bool) -> Attendance:
        """Record attendance; a second mark for the same day replaces the first."""
        key = (student_id, date)
        if key in self._attendance:
            return self._attendance.update(key, {"present": present})
        return self._attendance.add(Attendance(student_id=student_id, date=date, present=present))

    def get_attendance_status(self, student_id: str, date: str) -> Optional[bool]:
        record = self._attendance.get_by_id((student_id, date))
        return None if record is None else record.present

    def get_attendance_for_student(self, student_id: str) -> List[Attendance]:
        return self._attendance.query(student_id=student_id)

    @property
    def attendance(self) -> List[Attendance]:
        return self._attendance.list()

    # --- Certificates ---

    def add_certificate(self, certificate: Certificate) -> Certificate:
        return self._certificates.add(certificate)

    def get_certificates_by_academy(self, academy_id: str) -> List[Certificate]:
        student_ids = {student.id for student in self.get_students_by_academy(academy_id)}
        return self._certificates.query(lambda cert: cert.student_id in student_ids)

    # --- Coaches ---

    def add_coach(self, academy_id: str, coach: Coach) -> Optional[Academy]:
        academy = self._academies.get_by_id(academy_id)
        if academy is None:
            return None
        if not coach.id:
            coach = Coach(**{**coach.to_dict(), "id": generate_id("coach")})
        return self._academies.update(academy_id, {"coaches": [*academy.coaches, coach]})

    def remove_coach(self, academy_id: str, coach_id: str) -> Optional[Academy]:
        academy = self._academies.get_by_id(academy_id)
        if academy is None:
            return None
        return self._academies.update(
            academy_id, {"coaches": [c for c in academy.coaches if c.id != coach_id]}
        )

    # --- Photos ---

    def add_photo(self, academy_id: str, photo_uri: str) -> Optional[Academy]:
        academy = self._academies.get_by_id(academy_id)
        if academy is None:
            return None
        return self._academies.update(academy_id, {"photos": [photo_uri, *academy.photos]})

    def remove_photo(self, academy_id: str, photo_uri: str) -> Optional[Academy]:
        academy = self._academies.get_by_id(academy_id)
        if academy is None:
            return None
        return self._academies.update(
            academy_id, {"photos": [p for p in academy.photos if p != photo_uri]}
        )
