from __future__ import annotations

from flask import Flask, flash, g, jsonify, redirect, render_template, request, url_for

from ..common.datetime_utils import DateRange, parse_date_range
from ..common.web import json_error, request_payload, wants_json
from ..core.enums import RequestKind, Role
from ..core.exceptions import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    StoreFailure,
    ValidationError,
)
from ..container import Container
from ..users.gate import role_required


def register(app: Flask, container: Container) -> None:
    workflow = container.workflow_service

    def _date_range_from_args():
        try:
            return parse_date_range(
                request.args.get("startDate"),
                request.args.get("endDate"),
                today=workflow.today(),
            )
        except ValidationError as e:
            flash(str(e), "warning")
            return None

    def _dashboard(template: str, empty: dict, **extra):
        date_range = _date_range_from_args() or DateRange.for_day(workflow.today())
        try:
            data = workflow.list_for_role(g.auth, date_range)
        except StoreFailure:
            app.logger.exception("Error fetching dashboard data for %s", g.auth.user_id)
            flash("Could not load dashboard data", "danger")
            data = dict(empty, date_range=date_range)
        # the filter inputs show the range actually applied
        shown = data["date_range"]
        return render_template(
            template,
            user=g.auth,
            start_date=shown.start.isoformat(),
            end_date=shown.end.isoformat(),
            **data,
            **extra,
        )

    def _submit(kind: RequestKind, success_endpoint: str, form_endpoint: str, message: str):
        try:
            created = workflow.create_request(g.auth, kind, request_payload())
        except (ValidationError, AuthorizationError) as e:
            if wants_json():
                return json_error(e)
            flash(str(e), "danger")
            return redirect(url_for(form_endpoint))

        if wants_json():
            return jsonify({"message": message, "form": created.to_dict()}), 201
        flash(message, "success")
        return redirect(url_for(success_endpoint))

    def _decide_form(kind: RequestKind, request_id: int, back_endpoint: str):
        try:
            workflow.apply_decision(g.auth, kind, request_id, request.form.get("decision"))
            flash("Decision saved", "success")
        except NotFoundError:
            return "Request not found", 404
        except (ValidationError, AuthorizationError, InvalidTransitionError) as e:
            flash(str(e), "danger")
        return redirect(url_for(back_endpoint))

    def _decide_json(kind: RequestKind, request_id: int):
        decision = request_payload().get("decision")
        try:
            updated = workflow.apply_decision(g.auth, kind, request_id, decision)
        except (ValidationError, AuthorizationError, NotFoundError, InvalidTransitionError) as e:
            return json_error(e)
        return jsonify({"message": "Form decision updated successfully", "form": updated.to_dict()})

    # -------- Employee --------
    @app.route("/employee/dashboard", methods=["GET"], endpoint="employee_dashboard")
    @role_required(Role.EMPLOYEE)
    def employee_dashboard():
        return _dashboard("employee/dashboard.html", {"requests": []}, active_page="employee_dashboard")

    @app.route("/employee/travel-request-form", methods=["GET"], endpoint="employee_trf_form")
    @role_required(Role.EMPLOYEE)
    def employee_trf_form():
        try:
            hods = container.user_service.list_users(Role.HOD)
        except StoreFailure:
            app.logger.exception("Loading HOD list failed")
            hods = []
        return render_template(
            "employee/trf_form.html",
            user=g.auth,
            hods=hods,
            today=workflow.today(),
            active_page="employee_trf_form",
        )

    @app.route("/api/EMP/HOD/TRF", methods=["POST"], endpoint="create_emp_trf")
    @role_required(Role.EMPLOYEE)
    def create_emp_trf():
        return _submit(RequestKind.EMPLOYEE_TO_HOD, "employee_dashboard", "employee_trf_form", "EMPTRF request sent")

    # -------- HOD --------
    @app.route("/hod/dashboard", methods=["GET"], endpoint="hod_dashboard")
    @role_required(Role.HOD)
    def hod_dashboard():
        return _dashboard(
            "hod/dashboard.html",
            {"received": [], "sent": [], "bookings": []},
            active_page="hod_dashboard",
        )

    @app.route("/hod/decision/<int:request_id>", methods=["POST"], endpoint="hod_decision")
    @role_required(Role.HOD)
    def hod_decision(request_id: int):
        return _decide_form(RequestKind.EMPLOYEE_TO_HOD, request_id, "hod_dashboard")

    @app.route("/api/EMP/HOD/TRF/<int:request_id>/decision", methods=["POST"], endpoint="api_emp_trf_decision")
    @role_required(Role.HOD)
    def api_emp_trf_decision(request_id: int):
        return _decide_json(RequestKind.EMPLOYEE_TO_HOD, request_id)

    @app.route("/hod/TRF_ADMIN", methods=["GET"], endpoint="hod_trf_form")
    @role_required(Role.HOD)
    def hod_trf_form():
        return render_template("hod/trf_form.html", user=g.auth, today=workflow.today(), active_page="hod_trf_form")

    @app.route("/api/HOD/ADMIN/TRF", methods=["POST"], endpoint="create_hod_trf")
    @role_required(Role.HOD)
    def create_hod_trf():
        return _submit(RequestKind.HOD_TO_ADMIN, "hod_dashboard", "hod_trf_form", "TRF request sent")

    # -------- Admin --------
    @app.route("/admin/dashboard", methods=["GET"], endpoint="admin_dashboard")
    @role_required(Role.ADMIN)
    def admin_dashboard():
        return _dashboard(
            "admin/dashboard.html",
            {"requests": []},
            active_page="admin_dashboard",
        )

    @app.route("/admin/decision/<int:request_id>", methods=["POST"], endpoint="admin_decision")
    @role_required(Role.ADMIN)
    def admin_decision(request_id: int):
        return _decide_form(RequestKind.HOD_TO_ADMIN, request_id, "admin_dashboard")

    @app.route("/api/HOD/TRF/<int:request_id>/decision", methods=["POST"], endpoint="api_hod_trf_decision")
    @role_required(Role.ADMIN)
    def api_hod_trf_decision(request_id: int):
        return _decide_json(RequestKind.HOD_TO_ADMIN, request_id)

    @app.route("/admin/hodtrfs", methods=["GET"], endpoint="admin_hodtrfs")
    @role_required(Role.ADMIN)
    def admin_hodtrfs():
        requests_ = workflow.list_admin_requests(g.auth)
        return render_template("admin/hodtrfs.html", user=g.auth, requests=requests_, active_page="admin_hodtrfs")
