from __future__ import annotations

from flask import Flask, flash, g, redirect, render_template, request, session, url_for

from ..common.validators import optional_text
from ..common.web import request_payload
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, StoreFailure, ValidationError
from ..container import Container
from .gate import current_context, dashboard_endpoint, login_user, logout_user, role_required


def register(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        ctx = current_context()
        if ctx is not None:
            return redirect(url_for(dashboard_endpoint(ctx.role)))
        return render_template("index.html")

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = request_payload()
        user_id = optional_text(data.get("userId")) or ""
        password = data.get("password")
        password = "" if password is None else str(password)

        try:
            s_user = container.auth_service.authenticate(user_id, password)
        except AuthenticationError as e:
            flash(str(e), "danger")
            return render_template("index.html"), 401
        except StoreFailure:
            app.logger.exception("Login failed for %s", user_id)
            return "Server error", 500

        login_user(s_user)
        session.permanent = True
        app.logger.info("User %s logged in as %s", s_user.user_id, s_user.role.value)
        return redirect(url_for(dashboard_endpoint(s_user.role)))

    @app.route("/logout", endpoint="logout")
    def logout():
        logout_user()
        flash("Logged out.", "info")
        return redirect(url_for("index"))

    @app.route("/admin/users", methods=["GET", "POST"], endpoint="admin_users")
    @role_required(Role.ADMIN)
    def admin_users():
        if request.method == "POST":
            try:
                try:
                    role = Role(request.form.get("role", ""))
                except ValueError:
                    raise ValidationError("Invalid role")

                container.user_service.create_account(
                    user_id=request.form.get("userId", ""),
                    name=request.form.get("name", ""),
                    password=request.form.get("password", ""),
                    role=role,
                    department=request.form.get("department"),
                )
                flash("User created.", "success")
                return redirect(url_for("admin_users"))
            except ValidationError as e:
                flash(str(e), "danger")
            except StoreFailure:
                app.logger.exception("Creating user failed (admin %s)", g.auth.user_id)
                flash("Server error while creating user", "danger")

        try:
            users = container.user_service.list_users()
        except StoreFailure:
            app.logger.exception("Listing users failed")
            flash("Server error while loading users", "danger")
            users = []
        return render_template("admin/users.html", users=users, roles=list(Role), active_page="admin_users")
