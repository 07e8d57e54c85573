from __future__ import annotations

import os
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

os.environ.setdefault("APP_ENV", "testing")

from faculty_attendance.attendance.model import AttendanceRecord
from faculty_attendance.container import assemble
from faculty_attendance.core.enums import AttendanceStatus, LeaveStatus, Role
from faculty_attendance.leaves.model import LeaveApplication
from faculty_attendance.main import create_app
from faculty_attendance.users.model import User

TODAY = date(2026, 3, 10)
FACULTY_PASSWORD = "secret123"
ADMIN_PASSWORD = "admin123"


class InMemoryAttendance:
    def __init__(self):
        self._rows: dict[tuple[str, date], AttendanceRecord] = {}
        self._id = 0

    def list_for_date(self, attendance_date):
        return [r for (_, d), r in self._rows.items() if d == attendance_date]

    def list_for_faculty(self, faculty_id, *, newest_first=False):
        items = [r for r in self._rows.values() if r.faculty_id == faculty_id]
        items.sort(key=lambda r: r.attendance_date, reverse=newest_first)
        return items

    def get_for_faculty_and_date(self, faculty_id, attendance_date):
        return self._rows.get((faculty_id, attendance_date))

    def upsert_status(self, *, faculty_id, attendance_date, status):
        existing = self._rows.get((faculty_id, attendance_date))
        if existing:
            self._rows[(faculty_id, attendance_date)] = replace(existing, status=status)
            return
        self._id += 1
        self._rows[(faculty_id, attendance_date)] = AttendanceRecord(
            attendance_id=self._id,
            faculty_id=faculty_id,
            attendance_date=attendance_date,
            status=status,
        )

    def mark_present(self, *, faculty_id, attendance_date):
        existing = self._rows.get((faculty_id, attendance_date))
        if existing and existing.status == AttendanceStatus.LEAVE:
            return
        self.upsert_status(faculty_id=faculty_id, attendance_date=attendance_date, status=AttendanceStatus.PRESENT)

    def delete_for_faculty(self, faculty_id):
        for key in [k for k in self._rows if k[0] == faculty_id]:
            del self._rows[key]

    def all(self):
        return list(self._rows.values())


class InMemoryLeaves:
    def __init__(self, attendance: InMemoryAttendance):
        self._attendance = attendance
        self._items: dict[int, LeaveApplication] = {}
        self._next_id = 1

    def create(self, *, faculty_id, from_date, to_date, leave_reason):
        lid = self._next_id
        self._next_id += 1
        self._items[lid] = LeaveApplication(
            leave_id=lid,
            faculty_id=faculty_id,
            from_date=from_date,
            to_date=to_date,
            leave_reason=leave_reason,
            status=LeaveStatus.PENDING,
            created_at=datetime(2026, 3, 1, 9, 0, 0),
        )
        return lid

    def get_by_id(self, leave_id):
        return self._items.get(int(leave_id))

    def list_for_faculty(self, faculty_id, *, newest_first=False):
        items = [l for l in self._items.values() if l.faculty_id == faculty_id]
        items.sort(key=lambda l: (l.from_date, l.leave_id), reverse=newest_first)
        return items

    def list_by_status(self, status):
        return [l for l in self._items.values() if l.status == status]

    def count_by_status(self, status):
        return len(self.list_by_status(status))

    def decide(self, *, leave_id, status, decided_by, leave_days=()):
        leave = self._items.get(int(leave_id))
        if not leave or leave.status != LeaveStatus.PENDING:
            return False
        self._items[leave.leave_id] = replace(
            leave,
            status=status,
            decision_by=decided_by,
            decided_at=datetime(2026, 3, 2, 10, 0, 0),
        )
        for day in leave_days:
            self._attendance.upsert_status(faculty_id=leave.faculty_id, attendance_date=day, status=AttendanceStatus.LEAVE)
        return True

    def delete_for_faculty(self, faculty_id):
        for key in [k for k, l in self._items.items() if l.faculty_id == faculty_id]:
            del self._items[key]


class InMemoryUsers:
    def __init__(self, attendance: InMemoryAttendance, leaves: InMemoryLeaves):
        self._attendance = attendance
        self._leaves = leaves
        self._by_id: dict[int, User] = {}
        self._next_id = 1

    def get_by_email(self, email) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)

    def get_by_fid(self, fid, *, role=None) -> Optional[User]:
        for u in self._by_id.values():
            if u.fid == fid and (role is None or u.role == role):
                return u
        return None

    def create_user(self, *, fid, name, email, password_hash, role, gender=None, dob=None, phone=None):
        uid = self._next_id
        self._next_id += 1
        self._by_id[uid] = User(
            user_id=uid,
            fid=fid,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            gender=gender,
            dob=dob,
            phone=phone,
            created_at=datetime(2026, 1, 1, 8, 0, 0),
        )
        return uid

    def _replace(self, fid, **changes) -> bool:
        user = self.get_by_fid(fid)
        if not user:
            return False
        self._by_id[user.user_id] = replace(user, **changes)
        return True

    def update_phone(self, fid, phone):
        return self._replace(fid, phone=phone)

    def update_password(self, fid, password_hash):
        return self._replace(fid, password_hash=password_hash)

    def list_by_role(self, role):
        return sorted((u for u in self._by_id.values() if u.role == role), key=lambda u: u.name)

    def list_by_fids(self, fids):
        wanted = set(fids)
        return [u for u in self._by_id.values() if u.fid in wanted]

    def delete_faculty(self, fid):
        user = self.get_by_fid(fid, role=Role.FACULTY)
        self._attendance.delete_for_faculty(fid)
        self._leaves.delete_for_faculty(fid)
        if not user:
            return False
        del self._by_id[user.user_id]
        return True


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def leaves_repo(attendance_repo):
    return InMemoryLeaves(attendance_repo)


@pytest.fixture
def users_repo(attendance_repo, leaves_repo):
    return InMemoryUsers(attendance_repo, leaves_repo)


@pytest.fixture
def container(users_repo, attendance_repo, leaves_repo):
    return assemble(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        jwt_secret="test-jwt-secret",
        jwt_expires_hours=1,
        today=lambda: TODAY,
    )


@pytest.fixture
def admin(users_repo):
    users_repo.create_user(
        fid="ADMIN001",
        name="Admin",
        email="admin@test.local",
        password_hash=generate_password_hash(ADMIN_PASSWORD),
        role=Role.ADMIN,
    )
    return users_repo.get_by_fid("ADMIN001")


@pytest.fixture
def faculty(users_repo):
    users_repo.create_user(
        fid="F001",
        name="Asha Rao",
        email="asha@college.edu",
        password_hash=generate_password_hash(FACULTY_PASSWORD),
        role=Role.FACULTY,
        phone="9000000001",
    )
    return users_repo.get_by_fid("F001")


@pytest.fixture
def other_faculty(users_repo):
    users_repo.create_user(
        fid="F002",
        name="Bilal Khan",
        email="bilal@college.edu",
        password_hash=generate_password_hash(FACULTY_PASSWORD),
        role=Role.FACULTY,
    )
    return users_repo.get_by_fid("F002")


@pytest.fixture
def client(container):
    app = create_app(container=container)
    return app.test_client()


@pytest.fixture
def auth_headers(container):
    def _headers(user):
        return {"Authorization": f"Bearer {container.tokens.issue(user)}"}

    return _headers
