from __future__ import annotations

from datetime import date

from faculty_attendance.core.enums import AttendanceStatus, LeaveStatus

from conftest import FACULTY_PASSWORD, TODAY


def test_login_returns_token_without_password(client, faculty):
    resp = client.post("/api/auth/login", json={"email": "asha@college.edu", "password": FACULTY_PASSWORD})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["token"]
    assert body["user"]["fid"] == "F001"
    assert "password" not in body["user"] and "password_hash" not in body["user"]


def test_login_with_wrong_password(client, faculty):
    resp = client.post("/api/auth/login", json={"email": "asha@college.edu", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"message": "Invalid credentials"}


def test_login_with_missing_fields(client):
    assert client.post("/api/auth/login", json={}).status_code == 400


def test_protected_route_without_token(client):
    resp = client.get("/api/faculty/profile")

    assert resp.status_code == 401
    assert resp.get_json() == {"message": "No token, authorization denied"}


def test_protected_route_with_garbage_token(client):
    resp = client.get("/api/faculty/profile", headers={"Authorization": "Bearer not-a-jwt"})

    assert resp.status_code == 401
    assert resp.get_json() == {"message": "Token is not valid"}


def test_admin_route_refuses_faculty(client, faculty, auth_headers):
    resp = client.get("/api/admin/dashboard", headers=auth_headers(faculty))

    assert resp.status_code == 403
    assert resp.get_json() == {"message": "Access denied"}


def test_register_then_login(client):
    payload = {
        "name": "Deepa N",
        "email": "deepa@college.edu",
        "password": "pass1234",
        "fid": "F200",
        "gender": "F",
        "dob": "1990-01-31",
        "phone": "9333333333",
    }

    resp = client.post("/api/faculty/register", json=payload)
    assert resp.status_code == 201
    assert resp.get_json() == {"message": "Faculty registered successfully"}

    login = client.post("/api/auth/login", json={"email": "deepa@college.edu", "password": "pass1234"})
    assert login.status_code == 200


def test_register_duplicate_email_is_keyed_by_field(client, faculty):
    resp = client.post(
        "/api/faculty/register",
        json={"name": "X", "email": "asha@college.edu", "password": "pass1234", "fid": "F999"},
    )

    assert resp.status_code == 400
    assert resp.get_json() == {"email": "Faculty already exists"}


def test_register_with_numeric_dob_is_a_validation_error(client):
    resp = client.post(
        "/api/faculty/register",
        json={"name": "X", "email": "x@college.edu", "password": "pass1234", "fid": "F998", "dob": 19900101},
    )

    assert resp.status_code == 400
    assert "message" in resp.get_json()


def test_profile_read_and_update(client, faculty, auth_headers):
    headers = auth_headers(faculty)

    profile = client.get("/api/faculty/profile", headers=headers).get_json()
    assert profile["fid"] == "F001"
    assert profile["facialEncoding"] == []

    resp = client.put("/api/faculty/profile", json={"phone": "9444444444", "name": "ignored"}, headers=headers)
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["message"] == "Profile updated successfully"
    assert body["facultyProfile"]["phone"] == "9444444444"
    assert body["facultyProfile"]["name"] == "Asha Rao"


def test_change_password_allows_login_with_new_one(client, faculty, auth_headers):
    resp = client.post("/api/faculty/changePassword", json={"newPassword": "brand-new-1"}, headers=auth_headers(faculty))
    assert resp.get_json() == {"message": "Password changed successfully"}

    old = client.post("/api/auth/login", json={"email": "asha@college.edu", "password": FACULTY_PASSWORD})
    new = client.post("/api/auth/login", json={"email": "asha@college.edu", "password": "brand-new-1"})
    assert old.status_code == 401
    assert new.status_code == 200


def test_apply_leave_requires_all_fields(client, faculty, auth_headers):
    resp = client.post("/api/faculty/leave", json={"fromDate": "2026-03-12"}, headers=auth_headers(faculty))

    assert resp.status_code == 400
    assert resp.get_json() == {"message": "Please provide all required details"}


def test_apply_leave_rejects_bad_date(client, faculty, auth_headers):
    resp = client.post(
        "/api/faculty/leave",
        json={"fromDate": "12-03-2026", "toDate": "2026-03-13", "leaveReason": "x"},
        headers=auth_headers(faculty),
    )

    assert resp.status_code == 400


def test_leave_workflow_end_to_end(client, faculty, admin, auth_headers, attendance_repo):
    applied = client.post(
        "/api/faculty/leave",
        json={"fromDate": "2026-03-12", "toDate": "2026-03-14", "leaveReason": "Seminar"},
        headers=auth_headers(faculty),
    )
    assert applied.status_code == 201
    new_leave = applied.get_json()["newLeave"]
    assert new_leave["status"] == "Pending"
    assert new_leave["faculty_id"] == "F001"

    pending = client.get("/api/admin/leave/pending", headers=auth_headers(admin)).get_json()
    assert len(pending) == 1
    assert pending[0]["faculty"] == {"fid": "F001", "name": "Asha Rao"}

    resp = client.put(f"/api/admin/leave/{new_leave['_id']}", json={"status": "Approved"}, headers=auth_headers(admin))
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["message"] == "Leave request has been approved"
    assert body["leave"]["status"] == "Approved"
    assert body["leave"]["decisionBy"] == "ADMIN001"

    days = sorted(r.attendance_date for r in attendance_repo.list_for_faculty("F001"))
    assert days == [date(2026, 3, 12), date(2026, 3, 13), date(2026, 3, 14)]

    history = client.get("/api/faculty/F001/attendanceAndLeave", headers=auth_headers(faculty)).get_json()
    assert [r["facultyStatus"] for r in history["attendanceRecords"]] == ["L", "L", "L"]
    assert history["leaveDetails"][0]["status"] == "Approved"


def test_decide_leave_invalid_status(client, faculty, admin, auth_headers, leaves_repo):
    leave_id = leaves_repo.create(faculty_id="F001", from_date=TODAY, to_date=TODAY, leave_reason="x")

    resp = client.put(f"/api/admin/leave/{leave_id}", json={"status": "Maybe"}, headers=auth_headers(admin))

    assert resp.status_code == 400
    assert resp.get_json() == {"message": "Invalid status. Must be either Approved or Denied."}


def test_decide_leave_not_found(client, admin, auth_headers):
    resp = client.put("/api/admin/leave/404", json={"status": "Denied"}, headers=auth_headers(admin))

    assert resp.status_code == 404
    assert resp.get_json() == {"message": "Leave application not found"}


def test_decide_leave_with_non_numeric_id(client, admin, auth_headers):
    resp = client.put("/api/admin/leave/abc", json={"status": "Approved"}, headers=auth_headers(admin))

    assert resp.status_code == 404
    assert resp.get_json() == {"message": "Leave application not found"}


def test_approve_leave_ending_on_last_representable_day(client, faculty, admin, auth_headers, attendance_repo):
    applied = client.post(
        "/api/faculty/leave",
        json={"fromDate": "9999-12-30", "toDate": "9999-12-31", "leaveReason": "Sabbatical"},
        headers=auth_headers(faculty),
    )
    leave_id = applied.get_json()["newLeave"]["_id"]

    resp = client.put(f"/api/admin/leave/{leave_id}", json={"status": "Approved"}, headers=auth_headers(admin))

    assert resp.status_code == 200
    assert [r.attendance_date for r in attendance_repo.list_for_faculty("F001")] == [date(9999, 12, 30), date.max]


def test_deny_leave_message(client, faculty, admin, auth_headers, leaves_repo):
    leave_id = leaves_repo.create(faculty_id="F001", from_date=TODAY, to_date=TODAY, leave_reason="x")

    resp = client.put(f"/api/admin/leave/{leave_id}", json={"status": "Denied"}, headers=auth_headers(admin))

    assert resp.get_json()["message"] == "Leave request has been denied"
    assert leaves_repo.get_by_id(leave_id).status == LeaveStatus.DENIED


def test_dashboard_and_mark_attendance(client, faculty, other_faculty, admin, auth_headers):
    marked = client.post("/api/faculty/attendance", headers=auth_headers(faculty))
    assert marked.status_code == 200
    assert marked.get_json()["attendance"]["facultyStatus"] == "P"

    dashboard = client.get("/api/admin/dashboard", headers=auth_headers(admin)).get_json()
    assert dashboard == {"present": 1, "absent": 1, "onLeave": 0, "pendingLeaves": 0}


def test_faculty_cannot_read_colleague_history(client, faculty, other_faculty, auth_headers):
    resp = client.get("/api/faculty/F002/attendanceAndLeave", headers=auth_headers(faculty))

    assert resp.status_code == 403


def test_admin_lists_and_inspects_faculty(client, faculty, other_faculty, admin, auth_headers, attendance_repo):
    attendance_repo.upsert_status(faculty_id="F002", attendance_date=TODAY, status=AttendanceStatus.PRESENT)

    listing = client.get("/api/admin/faculty", headers=auth_headers(admin)).get_json()
    assert [f["fid"] for f in listing] == ["F001", "F002"]

    details = client.get("/api/admin/F002/facultyDetails", headers=auth_headers(admin)).get_json()
    assert details["facultyData"]["name"] == "Bilal Khan"
    assert len(details["attendanceRecords"]) == 1


def test_admin_deletes_faculty(client, faculty, admin, auth_headers):
    resp = client.delete("/api/admin/faculty/F001", headers=auth_headers(admin))
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Faculty and related attendance records deleted successfully"}

    again = client.delete("/api/admin/faculty/F001", headers=auth_headers(admin))
    assert again.status_code == 404
    assert again.get_json() == {"message": "Faculty not found"}


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nowhere")

    assert resp.status_code == 404
    assert "message" in resp.get_json()


def test_unexpected_error_is_reported_as_server_error(client, admin, auth_headers, users_repo, monkeypatch):
    def boom(role):
        raise RuntimeError("db down")

    monkeypatch.setattr(users_repo, "list_by_role", boom)

    resp = client.get("/api/admin/faculty", headers=auth_headers(admin))

    assert resp.status_code == 500
    assert resp.get_json() == {"message": "Server error", "error": "db down"}


def test_token_of_deleted_faculty_cannot_write(client, faculty, admin, auth_headers, attendance_repo, leaves_repo):
    headers = auth_headers(faculty)
    assert client.delete("/api/admin/faculty/F001", headers=auth_headers(admin)).status_code == 200

    profile = client.get("/api/faculty/profile", headers=headers)
    mark = client.post("/api/faculty/attendance", headers=headers)
    leave = client.post(
        "/api/faculty/leave",
        json={"fromDate": "2026-03-12", "toDate": "2026-03-12", "leaveReason": "x"},
        headers=headers,
    )

    assert (profile.status_code, mark.status_code, leave.status_code) == (404, 404, 404)
    assert mark.get_json() == {"message": "Faculty profile not found"}
    assert attendance_repo.all() == []
    assert leaves_repo.list_for_faculty("F001") == []
