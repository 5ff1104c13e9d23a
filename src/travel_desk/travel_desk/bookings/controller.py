from __future__ import annotations

from flask import Flask, flash, g, jsonify, redirect, render_template, url_for

from ..common.web import request_payload, status_for, wants_json
from ..core.enums import RequestKind, Role
from ..core.exceptions import AuthorizationError, NotFoundError, StoreFailure, ValidationError
from ..container import Container
from ..users.gate import role_required


def register(app: Flask, container: Container) -> None:
    workflow = container.workflow_service

    def _drivers():
        try:
            return container.user_service.list_users(Role.DRIVER)
        except StoreFailure:
            app.logger.exception("Loading drivers failed")
            return []

    @app.route("/driver/dashboard", methods=["GET"], endpoint="driver_dashboard")
    @role_required(Role.DRIVER)
    def driver_dashboard():
        try:
            data = workflow.list_for_role(g.auth)
            bookings = data["bookings"]
        except StoreFailure:
            app.logger.exception("Error fetching bookings for %s", g.auth.user_id)
            flash("Could not load bookings", "danger")
            bookings = []
        return render_template("driver/dashboard.html", user=g.auth, bookings=bookings, active_page="driver_dashboard")

    @app.route("/driver/history", methods=["GET"], endpoint="driver_history")
    @role_required(Role.DRIVER)
    def driver_history():
        bookings = workflow.driver_history(g.auth)
        return render_template("driver/history.html", user=g.auth, bookings=bookings, active_page="driver_history")

    @app.route("/api/driver/updateBooking", methods=["POST"], endpoint="update_booking")
    @role_required(Role.DRIVER)
    def update_booking():
        data = request_payload()
        try:
            booking_id = int(data.get("bookingId") or 0)
        except (ValueError, TypeError):
            return "Invalid booking id", 400

        try:
            booking = workflow.update_driver_booking(
                g.auth,
                booking_id,
                distance_traveled=data.get("distanceTraveled"),
                toll_usage=data.get("tollUsage"),
            )
        except NotFoundError:
            return "Booking not found", 404
        except (ValidationError, AuthorizationError) as e:
            return str(e), status_for(e)

        if wants_json():
            return jsonify({"message": "Booking updated successfully", "booking": booking.to_dict()})
        return "Booking updated successfully", 200

    @app.route("/hod/driverForm", methods=["GET"], endpoint="driver_form")
    @role_required(Role.HOD)
    def driver_form():
        return render_template("hod/driver_form.html", drivers=_drivers(), driver_id="", active_page="driver_form")

    @app.route("/driver/form/<driver_id>", methods=["GET"], endpoint="driver_form_for")
    @role_required(Role.HOD)
    def driver_form_for(driver_id: str):
        return render_template("hod/driver_form.html", drivers=_drivers(), driver_id=driver_id, active_page="driver_form")

    @app.route("/api/users/hod/bookings", methods=["POST"], endpoint="create_booking")
    @role_required(Role.HOD)
    def create_booking():
        try:
            booking = workflow.create_request(g.auth, RequestKind.DRIVER_BOOKING, request_payload())
        except (ValidationError, AuthorizationError) as e:
            if wants_json():
                return jsonify({"error": str(e)}), status_for(e)
            flash(str(e), "danger")
            return redirect(url_for("driver_form"))

        if wants_json():
            return jsonify({"message": "Booking saved successfully", "booking": booking.to_dict()}), 201
        flash("Booking saved successfully", "success")
        return redirect(url_for("hod_dashboard"))
