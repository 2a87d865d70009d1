from __future__ import annotations

from flask import Flask, session

from ..common.web import fail, ok, request_data, role_required
from ..core.enums import PortalRole
from ..core.exceptions import AlreadyMarkedError, NotFoundError, StorageError, ValidationError
from ..container import Container
from .service import parse_location


def register(app: Flask, container: Container) -> None:
    @app.route("/attendance", methods=["GET"], endpoint="attendance_status")
    @role_required(PortalRole.STAFF)
    def attendance_status():
        staff_id = session["staff_id"]
        try:
            staff = container.staff_directory.find_by_id(staff_id)
            record = container.attendance_service.get_today_record(staff_id)
        except NotFoundError:
            # Staff ID in session is no longer valid
            session.clear()
            return fail("Please log in to continue.", 401)
        except StorageError:
            app.logger.exception("attendance status load failed")
            return fail("Error loading data", 503)

        return ok(
            staff=staff.to_dict(),
            alreadyMarked=record is not None,
            record=record.to_dict() if record else None,
        )

    @app.route("/attendance", methods=["POST"], endpoint="mark_attendance")
    @role_required(PortalRole.STAFF)
    def mark_attendance():
        data = request_data()
        try:
            location = parse_location(data.get("latitude"), data.get("longitude"))
            record = container.attendance_service.mark(
                session["staff_id"],
                selfie_url=str(data.get("selfie") or data.get("selfieUrl") or ""),
                location=location,
            )
        except AlreadyMarkedError as e:
            return fail(
                "You have already marked your attendance for today.",
                409,
                selfieUrl=e.record.selfie_url if e.record else None,
            )
        except ValidationError as e:
            return fail(str(e), 400)
        except NotFoundError as e:
            return fail(str(e), 404)
        except StorageError:
            app.logger.exception("attendance submission failed")
            return fail("Could not save your attendance.", 503)

        return ok("Your attendance has been marked.", 201, record=record.to_dict())
