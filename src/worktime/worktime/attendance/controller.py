from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_hhmm, parse_iso_date
from ..common.http import json_api, request_payload
from ..container import Container
from .model import AttendanceSession


def session_to_dict(s: AttendanceSession) -> dict:
    return {
        "session_id": s.session_id,
        "user_id": s.user_id,
        "date": s.work_date.isoformat(),
        "check_in": format_hhmm(s.check_in_time),
        "check_out": format_hhmm(s.check_out_time) if s.check_out_time else None,
        "total_worked_minutes": s.total_worked_minutes,
        "status": s.status.value,
        "note": s.note,
        "is_manual": s.is_manual,
    }


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    @app.route("/api/users/<int:user_id>/checkin", methods=["POST"], endpoint="api_checkin")
    @json_api
    def checkin(user_id: int):
        rec = svc.check_in(user_id)
        return jsonify({"success": True, "message": "Checked in", "session": session_to_dict(rec)}), 201

    @app.route("/api/users/<int:user_id>/checkout", methods=["POST"], endpoint="api_checkout")
    @json_api
    def checkout(user_id: int):
        rec = svc.check_out(user_id)
        return jsonify({"success": True, "message": "Checked out", "session": session_to_dict(rec)})

    @app.route("/api/users/<int:user_id>/today", methods=["GET"], endpoint="api_today")
    @json_api
    def today(user_id: int):
        sessions = svc.today_sessions(user_id)
        return jsonify(
            {
                "success": True,
                "sessions": [session_to_dict(s) for s in sessions],
                "elapsed_minutes": svc.elapsed_minutes(user_id),
                "committed_minutes": container.commitment_service.committed_minutes_for(user_id),
            }
        )

    @app.route("/api/users/<int:user_id>/attendance", methods=["GET"], endpoint="api_attendance_list")
    @json_api
    def history(user_id: int):
        limit = request.args.get("limit", type=int) or 30
        return jsonify({"success": True, "sessions": [session_to_dict(s) for s in svc.history(user_id, limit=limit)]})

    @app.route("/api/users/<int:user_id>/attendance", methods=["POST"], endpoint="api_attendance_manual")
    @json_api
    def add_manual(user_id: int):
        data = request_payload()
        rec = svc.add_manual(
            user_id,
            work_date=parse_iso_date(data.get("date", "")),
            check_in=data.get("check_in", ""),
            check_out=data.get("check_out", ""),
            note=data.get("note"),
        )
        return jsonify({"success": True, "session": session_to_dict(rec)}), 201

    @app.route("/api/attendance/<int:session_id>", methods=["PATCH"], endpoint="api_attendance_update")
    @json_api
    def update(session_id: int):
        data = request_payload()
        rec = svc.update(
            session_id,
            check_in=data.get("check_in"),
            check_out=data.get("check_out"),
            note=data.get("note"),
        )
        return jsonify({"success": True, "session": session_to_dict(rec)})

    @app.route("/api/attendance/<int:session_id>", methods=["DELETE"], endpoint="api_attendance_delete")
    @json_api
    def delete(session_id: int):
        svc.delete(session_id)
        return jsonify({"success": True})
