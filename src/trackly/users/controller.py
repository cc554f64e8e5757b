from __future__ import annotations

from flask import Flask, session

from ..common.web import current_user_id, fail, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _start_session(user) -> None:
        session.clear()
        session["user_id"] = user.user_id
        session["name"] = user.name

    @app.route("/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        body = json_body()
        user = container.auth_service.register(
            name=body.get("name", ""),
            email=body.get("email", ""),
            password=body.get("password", ""),
            current_semester=body.get("currentSemester", 1),
        )
        _start_session(user)
        return ok({"id": user.user_id, "name": user.name, "email": user.email}, status=201)

    @app.route("/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        body = json_body()
        user = container.auth_service.authenticate(body.get("email", ""), body.get("password", ""))
        _start_session(user)
        return ok({"id": user.user_id, "name": user.name, "email": user.email})

    @app.route("/auth/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        session.clear()
        return ok({})

    @app.route("/auth/forgot-password", methods=["POST"], endpoint="auth_forgot_password")
    def auth_forgot_password():
        result = container.password_reset_service.request_reset(json_body().get("email", ""))
        if not result.success:
            return fail("Failed to send reset email", status=500)
        return ok({}, message="Password reset email sent")

    @app.route("/auth/reset-password", methods=["POST"], endpoint="auth_reset_password")
    def auth_reset_password():
        body = json_body()
        container.password_reset_service.reset_password(body.get("token", ""), body.get("password", ""))
        return ok({}, message="Password reset successful")

    @app.route("/users/me", methods=["GET"], endpoint="users_me")
    @login_required
    def users_me():
        return ok(container.user_service.get(current_user_id()).to_dict())

    @app.route("/users/me/notification-preferences", methods=["PUT"], endpoint="users_preferences")
    @login_required
    def users_preferences():
        user = container.user_service.update_notification_preferences(current_user_id(), json_body())
        return ok(user.preferences.to_dict())

    @app.route("/users/profile", methods=["PUT"], endpoint="users_profile")
    @login_required
    def users_profile():
        user = container.user_service.update_profile(current_user_id(), json_body())
        session["name"] = user.name
        return ok(user.to_dict())

    @app.route("/users/change-password", methods=["PUT"], endpoint="users_change_password")
    @login_required
    def users_change_password():
        body = json_body()
        container.auth_service.change_password(
            current_user_id(),
            current_password=body.get("currentPassword", ""),
            new_password=body.get("newPassword", ""),
        )
        return ok({}, message="Password changed successfully")
