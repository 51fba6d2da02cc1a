from __future__ import annotations

import pytest


def _login(app, email: str, password: str = "secret123"):
    client = app.test_client()
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return client


@pytest.fixture
def admin(app):
    return _login(app, "admin@staffdesk.local")


@pytest.fixture
def employee(app):
    return _login(app, "asha@staffdesk.local")


def test_requires_login(client):
    resp = client.get("/api/employee/attendance?month=1&year=2025")
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Not authenticated"}


def test_pending_account_can_not_log_in(client):
    resp = client.post("/api/auth/login", json={"email": "priya@staffdesk.local", "password": "secret123"})
    assert resp.status_code == 403
    assert "approval" in resp.get_json()["error"]


def test_wrong_password(client):
    resp = client.post("/api/auth/login", json={"email": "asha@staffdesk.local", "password": "nope"})
    assert resp.status_code == 401


def test_register_then_login_is_blocked_until_approved(app, client, admin):
    resp = client.post(
        "/api/auth/register",
        json={"email": "new@staffdesk.local", "password": "secret123", "name": "New Person"},
    )
    assert resp.status_code == 201
    user_id = resp.get_json()["userId"]

    assert client.post("/api/auth/login", json={"email": "new@staffdesk.local", "password": "secret123"}).status_code == 403

    resp = admin.put(f"/api/admin/employees/{user_id}/status", json={"status": "approved"})
    assert resp.status_code == 200
    _login(app, "new@staffdesk.local")


def test_rejection_takes_effect_on_a_live_session(admin, employee):
    assert employee.post("/api/employee/punch-in").status_code == 200

    assert admin.put("/api/admin/employees/2/status", json={"status": "rejected"}).status_code == 200

    resp = employee.post("/api/employee/punch-out")
    assert resp.status_code == 403
    assert employee.get("/api/auth/me").get_json()["status"] == "rejected"


def test_session_of_deleted_user_is_dropped(app, employee, users_repo, monkeypatch):
    monkeypatch.setattr(users_repo, "get_by_id", lambda _user_id: None)

    assert employee.get("/api/employee/attendance/today").status_code == 401


def test_employee_can_not_use_admin_routes(employee):
    resp = employee.get("/api/admin/employees/2/attendance?month=1&year=2025")
    assert resp.status_code == 403


def test_employee_month_summary(employee):
    resp = employee.get("/api/employee/attendance?month=2&year=2024")

    assert resp.status_code == 200
    data = resp.get_json()
    assert data["daysInMonth"] == 29
    assert data["sundays"] == 4
    assert data["absentDays"] == 25
    assert data["baseSalary"] == 30000


@pytest.mark.parametrize("query", ["", "?month=13&year=2025", "?month=1&year=abc"])
def test_month_and_year_are_validated(employee, query):
    resp = employee.get(f"/api/employee/attendance{query}")
    assert resp.status_code == 400


def test_admin_summary_for_unknown_employee(admin):
    resp = admin.get("/api/admin/employees/99/attendance?month=1&year=2025")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Approved employee not found"}


def test_punch_in_and_out(employee, clock, fixed_now):
    resp = employee.post("/api/employee/punch-in")
    assert resp.status_code == 200
    assert resp.get_json()["punchIn"] == fixed_now.isoformat()

    assert employee.post("/api/employee/punch-in").status_code == 400

    clock.now = fixed_now.replace(hour=18, minute=0)
    resp = employee.post("/api/employee/punch-out")
    assert resp.get_json()["totalHours"] == 8.5

    today = employee.get("/api/employee/attendance/today").get_json()
    assert today["punchOut"] == clock.now.isoformat()


def test_wfh_approval_flows_into_monthly_summary(employee, admin):
    # 2025-01-12 is a Sunday, so only two of the three days count as present
    resp = employee.post(
        "/api/employee/requests",
        json={"category": "wfh", "message": "Plumber visit", "fromDate": "2025-01-10", "toDate": "2025-01-12"},
    )
    assert resp.status_code == 201
    request_id = resp.get_json()["requestId"]

    resp = admin.put(f"/api/admin/requests/{request_id}", json={"status": "approved", "adminReply": "Fine"})
    assert resp.status_code == 200

    again = admin.put(f"/api/admin/requests/{request_id}", json={"status": "rejected", "adminReply": "No"})
    assert again.status_code == 400

    data = admin.get("/api/admin/employees/2/attendance?month=1&year=2025").get_json()
    assert data["presentDays"] == 2
    assert data["sundays"] == 4
    assert {a["workType"] for a in data["attendances"]} == {"wfh"}
    assert len(data["attendances"]) == 3

    mine = employee.get("/api/employee/requests").get_json()
    assert mine[0]["status"] == "approved"
    assert mine[0]["adminReply"] == "Fine"


def test_invalid_request_category(employee):
    resp = employee.post("/api/employee/requests", json={"category": "sabbatical", "message": "x"})
    assert resp.status_code == 400


def test_holidays_reduce_absences(admin):
    resp = admin.post("/api/admin/holidays", json={"date": "2025-01-01", "description": "New Year"})
    assert resp.status_code == 201
    assert admin.post("/api/admin/holidays", json={"date": "2025-01-01"}).status_code == 400

    data = admin.get("/api/admin/employees/2/attendance?month=1&year=2025").get_json()
    assert data["holidays"] == 1
    assert data["absentDays"] == 31 - 4 - 1
    assert admin.get("/api/admin/holidays?year=2025&month=1").get_json()[0]["description"] == "New Year"


def test_attendance_csv_export(admin):
    resp = admin.get("/api/admin/employees/2/attendance.csv?month=1&year=2025")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "attendance_2_2025-01.csv" in resp.headers["Content-Disposition"]
    body = resp.data.decode("utf-8-sig")
    assert body.splitlines()[0] == "date,status,workType,punchIn,punchOut,totalHours"
    assert "sundays,4" in body
    assert "calculatedSalary,3870.97" in body


def test_dashboard(admin, employee):
    employee.post("/api/employee/punch-in")

    overview = admin.get("/api/admin/dashboard").get_json()
    assert overview == {"totalEmployees": 2, "presentToday": 1, "absentToday": 1}


def test_tasks_and_reports(admin, employee):
    resp = admin.post("/api/admin/tasks", json={"title": "Inventory", "description": "Count stock", "assignedTo": ["2"]})
    assert resp.status_code == 201
    task_id = resp.get_json()["taskId"]

    tasks = employee.get("/api/employee/tasks").get_json()
    assert tasks[0]["title"] == "Inventory"

    resp = employee.post("/api/employee/reports", json={"taskId": task_id, "summary": "Done", "status": "completed"})
    assert resp.status_code == 201

    assert admin.get("/api/admin/tasks?status=completed").get_json()[0]["title"] == "Inventory"
    assert admin.get("/api/admin/reports?search=asha").get_json()[0]["summary"] == "Done"


def test_salary_update(admin):
    assert admin.put("/api/admin/employees/2/salary", json={"salary": 42000}).status_code == 200
    assert admin.put("/api/admin/employees/4/salary", json={"salary": 42000}).status_code == 404
    assert admin.get("/api/admin/employees").get_json()[0]["salary"] == 42000


def test_logout(employee):
    assert employee.post("/api/auth/logout").status_code == 200
    assert employee.get("/api/auth/me").status_code == 401
