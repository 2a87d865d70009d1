from __future__ import annotations

from flask import Flask, session

from ..attendance.export import attendance_csv, export_filename
from ..common.web import fail, ok, request_data, role_required
from ..core.constants import SCHOOL_CLASSES
from ..core.enums import PortalRole, StaffRole
from ..core.exceptions import (
    AuthenticationError,
    DuplicateError,
    NoDataError,
    StorageError,
    ValidationError,
)
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _start_session(s_user) -> None:
        session.clear()
        session["role"] = s_user.role.value
        session["name"] = s_user.display_name
        if s_user.staff_id:
            session["staff_id"] = s_user.staff_id

    def _register_staff(*, require_teaching_details: bool):
        try:
            staff_id = container.staff_directory.register(
                request_data(), require_teaching_details=require_teaching_details
            )
        except ValidationError as e:
            return fail(str(e), 400)
        except DuplicateError as e:
            return fail(str(e), 409)
        except StorageError:
            app.logger.exception("staff registration failed")
            return fail("Could not complete registration. Please try again.", 503)

        return ok(
            "Registration successful. Please save this ID; you will need it to mark your attendance.",
            201,
            staffId=staff_id,
        )

    @app.route("/register", methods=["GET"], endpoint="register_form")
    def register_form():
        return ok(
            roles=[{"value": r.value, "label": r.label} for r in StaffRole],
            classes=[{"id": cid, "label": label} for cid, label in SCHOOL_CLASSES],
        )

    @app.route("/register", methods=["POST"], endpoint="register")
    def register_view():
        return _register_staff(require_teaching_details=True)

    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        staff_id = str(request_data().get("staffId", ""))
        try:
            s_user = container.auth_service.login_staff(staff_id)
        except AuthenticationError as e:
            return fail(str(e), 401)
        except StorageError:
            app.logger.exception("staff login failed")
            return fail("Could not log in. Please try again.", 503)

        _start_session(s_user)
        return ok(f"Welcome, {s_user.display_name}!", staffId=s_user.staff_id)

    def _portal_login(role: PortalRole, welcome: str):
        data = request_data()
        try:
            s_user = container.auth_service.login_portal(
                role, str(data.get("email", "")), str(data.get("password", ""))
            )
        except AuthenticationError as e:
            return fail(str(e), 401)

        _start_session(s_user)
        return ok(welcome)

    @app.route("/admin/login", methods=["POST"], endpoint="admin_login")
    def admin_login():
        return _portal_login(PortalRole.ADMIN, "Redirecting to admin dashboard...")

    @app.route("/vice-principal/login", methods=["POST"], endpoint="vice_principal_login")
    def vice_principal_login():
        return _portal_login(PortalRole.VICE_PRINCIPAL, "Redirecting to Vice Principal dashboard...")

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok("Logged out.")

    @app.route("/admin/dashboard", endpoint="admin_dashboard")
    @role_required(PortalRole.ADMIN)
    def admin_dashboard():
        try:
            summary = container.attendance_service.dashboard_summary()
            staff = [s.to_dict() for s in container.staff_directory.list_all()]
            attendance = [r.to_dict() for r in container.attendance_service.list_all()]
        except StorageError:
            app.logger.exception("admin dashboard load failed")
            return fail("Error loading data", 503)

        return ok(summary=summary, staff=staff, attendance=attendance)

    @app.route("/admin/staff", methods=["POST"], endpoint="admin_register_staff")
    @role_required(PortalRole.ADMIN)
    def admin_register_staff():
        return _register_staff(require_teaching_details=False)

    @app.route("/admin/attendance.csv", endpoint="admin_attendance_csv")
    @role_required(PortalRole.ADMIN)
    def admin_attendance_csv():
        try:
            body = attendance_csv(container.attendance_service.list_all())
        except NoDataError as e:
            return fail(str(e), 404)
        except StorageError:
            app.logger.exception("attendance export failed")
            return fail("Error loading data", 503)

        filename = export_filename(container.attendance_service.today())
        return app.response_class(
            body.encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
