from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_api, request_payload
from ..container import Container
from .model import CommitmentChange, Holiday


def holiday_to_dict(h: Holiday) -> dict:
    return {"holiday_id": h.holiday_id, "date": h.holiday_date.isoformat(), "title": h.title}


def commitment_to_dict(c: CommitmentChange) -> dict:
    return {
        "change_id": c.change_id,
        "hours_per_day": c.hours_per_day,
        "effective_from": c.effective_from.isoformat(),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/users/<int:user_id>/holidays", methods=["GET"], endpoint="api_holidays")
    @json_api
    def list_holidays(user_id: int):
        holidays = container.holiday_service.list(user_id)
        return jsonify({"success": True, "holidays": [holiday_to_dict(h) for h in holidays]})

    @app.route("/api/users/<int:user_id>/holidays", methods=["POST"], endpoint="api_holidays_add")
    @json_api
    def add_holiday(user_id: int):
        data = request_payload()
        holiday = container.holiday_service.add(
            user_id,
            holiday_date=parse_iso_date(data.get("date", "")),
            title=data.get("title", ""),
        )
        return jsonify({"success": True, "holiday": holiday_to_dict(holiday)}), 201

    @app.route("/api/holidays/<int:holiday_id>", methods=["DELETE"], endpoint="api_holidays_delete")
    @json_api
    def delete_holiday(holiday_id: int):
        container.holiday_service.delete(holiday_id)
        return jsonify({"success": True})

    @app.route("/api/users/<int:user_id>/commitments", methods=["GET"], endpoint="api_commitments")
    @json_api
    def list_commitments(user_id: int):
        history = container.commitment_service.history(user_id)
        return jsonify({"success": True, "commitments": [commitment_to_dict(c) for c in history]})

    @app.route("/api/users/<int:user_id>/commitments", methods=["POST"], endpoint="api_commitments_add")
    @json_api
    def add_commitment(user_id: int):
        data = request_payload()
        effective_from = parse_iso_date(data["effective_from"]) if data.get("effective_from") else None
        change = container.commitment_service.change_commitment(
            user_id,
            data.get("hours_per_day"),
            effective_from=effective_from,
        )
        return jsonify({"success": True, "commitment": commitment_to_dict(change)}), 201
