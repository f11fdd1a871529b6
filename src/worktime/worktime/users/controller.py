from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_api, request_payload
from ..common.validators import require_hours_per_day, require_rounding_rule, require_weekdays
from ..container import Container
from .model import User


def user_to_dict(user: User) -> dict:
    return {
        "user_id": user.user_id,
        "full_name": user.full_name,
        "committed_hours_per_day": user.committed_hours_per_day,
        "weekly_off_days": sorted(d.value for d in user.weekly_off_days),
        "timezone": user.timezone,
        "rounding_rule": user.rounding_rule.value,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/users", methods=["POST"], endpoint="api_users_create")
    @json_api
    def create_user():
        data = request_payload()
        user = container.user_settings_service.register(
            full_name=data.get("full_name", ""),
            committed_hours_per_day=data.get("committed_hours_per_day", 8),
            weekly_off_days=data.get("weekly_off_days", ["Saturday", "Sunday"]),
            timezone=data.get("timezone", "UTC"),
        )
        return jsonify({"success": True, "user": user_to_dict(user)}), 201

    @app.route("/api/users/<int:user_id>/settings", methods=["GET"], endpoint="api_user_settings")
    @json_api
    def get_settings(user_id: int):
        user = container.user_settings_service.get(user_id)
        return jsonify({"success": True, "user": user_to_dict(user)})

    @app.route("/api/users/<int:user_id>/settings", methods=["PATCH"], endpoint="api_user_settings_update")
    @json_api
    def update_settings(user_id: int):
        data = request_payload()
        svc = container.user_settings_service
        svc.get(user_id)

        # Validate every field before writing any of them.
        off_days = require_weekdays(data.get("weekly_off_days") or []) if "weekly_off_days" in data else None
        rounding = require_rounding_rule(data.get("rounding_rule")) if "rounding_rule" in data else None
        hours = require_hours_per_day(data.get("committed_hours_per_day")) if "committed_hours_per_day" in data else None

        if off_days is not None:
            svc.set_weekly_off_days(user_id, [d.value for d in off_days])
        if rounding is not None:
            svc.set_rounding_rule(user_id, rounding)
        if hours is not None:
            container.commitment_service.change_commitment(user_id, hours)
        return jsonify({"success": True, "user": user_to_dict(svc.get(user_id))})
