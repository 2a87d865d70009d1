from __future__ import annotations

import json

from flask import Flask, session

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_role, fail, ok, request_data, role_required
from ..core.enums import PortalRole
from ..core.exceptions import (
    AuthorizationError,
    NotFoundError,
    PreconditionError,
    StorageError,
    TimetableGenerationError,
    ValidationError,
)
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.timetable_service

    @app.route("/vice-principal/dashboard", endpoint="vice_principal_dashboard")
    @role_required(PortalRole.VICE_PRINCIPAL)
    def vice_principal_dashboard():
        try:
            today = container.attendance_service.today()
            teachers = svc.present_teachers(today)
            published = svc.is_published(today)
            timetable = svc.get(today).to_payload() if published else None
        except StorageError:
            app.logger.exception("vice-principal dashboard load failed")
            return fail("Error loading data", 503)

        return ok(
            date=today.strftime("%Y-%m-%d"),
            presentTeachers=[t.model_dump(by_alias=True) for t in teachers],
            timetable=timetable,
            isScheduled=published,
        )

    @app.route("/vice-principal/timetable/generate", methods=["POST"], endpoint="generate_timetable")
    @role_required(PortalRole.VICE_PRINCIPAL)
    def generate_timetable():
        try:
            timetable = svc.generate(current_role=current_role())
        except PreconditionError as e:
            return fail(str(e), 409)
        except TimetableGenerationError as e:
            return fail(str(e), 502)
        except AuthorizationError as e:
            return fail(str(e), 403)
        except StorageError:
            app.logger.exception("timetable request build failed")
            return fail("Error loading data", 503)

        return ok(
            "AI has generated the timetable. Review and schedule it.",
            timetable=timetable.to_payload(),
            conflicts=svc.review(timetable),
        )

    @app.route("/vice-principal/timetable/publish", methods=["POST"], endpoint="publish_timetable")
    @role_required(PortalRole.VICE_PRINCIPAL)
    def publish_timetable():
        data = request_data()
        raw = data.get("timetable")
        if not raw:
            return fail("No timetable to schedule.", 400)
        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except ValueError:
                return fail("Timetable must be a JSON object", 400)

        try:
            timetable = svc.publish(current_role=current_role(), timetable=raw)
        except ValidationError as e:
            return fail(str(e), 400)
        except AuthorizationError as e:
            return fail(str(e), 403)
        except StorageError:
            app.logger.exception("timetable publish failed")
            return fail("Could not save the schedule.", 503)

        return ok(
            "Timetable has been published to all relevant staff.",
            conflicts=svc.review(timetable),
        )

    @app.route("/timetable/<day>", endpoint="timetable_for_date")
    @role_required()
    def timetable_for_date(day: str):
        try:
            work_date = parse_iso_date(day)
        except ValueError:
            return fail("Date must be YYYY-MM-DD", 400)

        try:
            timetable = svc.get(work_date)
        except NotFoundError as e:
            return fail(str(e), 404)
        except StorageError:
            app.logger.exception("timetable load failed")
            return fail("Error loading data", 503)

        return ok(date=day, timetable=timetable.to_payload())

    @app.route("/my-schedule", endpoint="my_schedule")
    @role_required(PortalRole.STAFF)
    def my_schedule():
        try:
            today = container.attendance_service.today()
            rows = svc.schedule_for_teacher(session.get("name", ""), today)
        except NotFoundError as e:
            return fail(str(e), 404)
        except StorageError:
            app.logger.exception("personal schedule load failed")
            return fail("Error loading data", 503)

        return ok(date=today.strftime("%Y-%m-%d"), schedule=rows)
