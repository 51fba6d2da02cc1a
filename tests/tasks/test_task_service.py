from __future__ import annotations

from datetime import date

import pytest

from src.staffdesk.staffdesk.core.enums import AccountStatus, Role, TaskStatus
from src.staffdesk.staffdesk.core.exceptions import AuthorizationError, ValidationError
from src.staffdesk.staffdesk.tasks.service import TaskService

ADMIN = {"current_role": Role.ADMIN, "current_status": AccountStatus.APPROVED}
EMPLOYEE = {"current_role": Role.EMPLOYEE, "current_status": AccountStatus.APPROVED}


@pytest.fixture
def service(tasks_repo, users_repo):
    return TaskService(tasks_repo, users_repo)


def test_create_task_keeps_only_approved_assignees(service, tasks_repo):
    task_id = service.create_task(
        **ADMIN,
        admin_user_id=1,
        title="Quarterly audit",
        description="Collect receipts",
        assigned_to=[2, 4, 99, 3, 2],
    )

    task = tasks_repo.get_assigned(task_id=task_id, user_id=2)
    assert task.assigned_to == (2, 3)
    assert task.status == TaskStatus.ONGOING
    assert task.created_by == 1


def test_create_task_requires_title(service):
    with pytest.raises(ValidationError):
        service.create_task(**ADMIN, admin_user_id=1, title=" ", description="x", assigned_to=[2])


def test_only_admin_creates_tasks(service):
    with pytest.raises(AuthorizationError):
        service.create_task(**EMPLOYEE, admin_user_id=2, title="t", description="d", assigned_to=[2])


def test_list_tasks_filters(service, tasks_repo):
    first = service.create_task(**ADMIN, admin_user_id=1, title="A", description="a", assigned_to=[2])
    service.create_task(**ADMIN, admin_user_id=1, title="B", description="b", assigned_to=[3])
    service.create_task(**ADMIN, admin_user_id=1, title="C", description="c", assigned_to=[2])
    tasks_repo.update_status(first, status=TaskStatus.COMPLETED)

    assert [t["title"] for t in service.list_tasks(**ADMIN, status="all")] == ["C", "B", "A"]
    assert [t["title"] for t in service.list_tasks(**ADMIN, status="completed")] == ["A"]
    assert [t["title"] for t in service.list_tasks(**ADMIN, start_date=date(2025, 3, 2), end_date=date(2025, 3, 2))] == [
        "B"
    ]


def test_list_tasks_rejects_unknown_status(service):
    with pytest.raises(ValidationError):
        service.list_tasks(**ADMIN, status="archived")


def test_my_tasks_carry_creator_name(service):
    service.create_task(**ADMIN, admin_user_id=1, title="A", description="a", assigned_to=[2])
    service.create_task(**ADMIN, admin_user_id=1, title="B", description="b", assigned_to=[3])

    mine = service.get_my_tasks(**EMPLOYEE, user_id=2)

    assert [t["title"] for t in mine] == ["A"]
    assert mine[0]["createdBy"] == "Admin"
