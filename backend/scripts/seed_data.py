"""Create the TaskLine tables and seed a demo project plan.

Run with ``--schema-only`` to create the tables without demo data.

Tasks are created through the task service so codes are allocated and
validated exactly as they are for API requests.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date
from taskline.database import SessionLocal, engine, Base
import taskline.models  # noqa: F401

from taskline.models.project import Project
from taskline.schemas.project import ProjectCreate
from taskline.schemas.task import ProjectTaskCreate
from taskline.services import project_service, task_service
from taskline.services.dependency_service import validate_dependencies

DEMO_TASKS = [
    dict(description="Kickoff meeting", phase="Phase 1: Initiation", start_date=date(2026, 1, 5),
         due_date=date(2026, 1, 6), owner="PM", status="Complete"),
    dict(description="Confirm requirements", phase="Phase 1: Initiation", duration_days=5,
         dependency="T001", owner="BA", status="In Progress", completion_percent=60),
    dict(description="Vendor selection", phase="Phase 2: Planning", duration_days=10,
         dependency="T002", priority="High", approval_required="Yes", approver="CFO"),
    dict(description="Site survey", phase="Phase 2: Planning", start_date=date(2026, 1, 20),
         due_date=date(2026, 1, 23), owner="Facilities"),
    dict(description="Build-out", phase="Phase 3: Execution", duration_days=20,
         dependency="T003,T004", budget=4500000),
    dict(description="Move day", phase="Phase 3: Execution", due_date=date(2026, 3, 30),
         duration_days=2, dependency="T005", priority="High"),
    dict(description="Lessons learned", duration_days=1, dependency="T006"),
]


def init_db():
    Base.metadata.create_all(bind=engine)
    print(f"Tables ready: {', '.join(sorted(Base.metadata.tables))}")


def seed():
    init_db()
    db = SessionLocal()
    try:
        if db.query(Project).count() > 0:
            print("Database already seeded. Skipping.")
            return

        project = project_service.create_project(db, ProjectCreate(
            name="HQ Office Relocation",
            description="Move headquarters to the new campus",
            project_manager="PM",
            status="Active",
            start_date=date(2026, 1, 5),
            target_completion_date=date(2026, 4, 30),
            budget=12000000,
        ))
        tasks = [
            task_service.create_task(db, project.project_id, ProjectTaskCreate(**fields))
            for fields in DEMO_TASKS
        ]

        print("Seed data created successfully!")
        print(f"  Project: {project.name} (ID={project.project_id})")
        print(f"  Tasks: {', '.join(task.task_code for task in tasks)}")
        issues = validate_dependencies(task_service.get_tasks(db, project.project_id))
        print(f"  Dependency issues: {len(issues)}")

    except Exception as e:
        db.rollback()
        raise e
    finally:
        db.close()


if __name__ == "__main__":
    if "--schema-only" in sys.argv[1:]:
        init_db()
    else:
        seed()
