import os
import re
import sys
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flask import Flask, request, jsonify
from antiques_trail.helpers.storage import StorageClient, StorageError
from antiques_trail.hours.models import DayHours
from antiques_trail.hours.service import HoursService
from antiques_trail.hours.utils.legacy_parser import parseLegacyHoursWithDiagnostics
from antiques_trail.hours.utils.time_format import convertTo24HourFormat
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

_TIME_FORMAT = re.compile(r"^\d{1,2}(:\d{2})?$")
_service = None


def get_service() -> HoursService:
    """Lazily build the shared HoursService backed by Supabase."""
    global _service
    if _service is None:
        _service = HoursService.from_config(StorageClient())
    return _service


def _place_id_from(source):
    raw = source.get('placeId') or source.get('place_id')
    if raw is None or raw == '':
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def _normalize_time(value):
    """Return "HH:MM" for None / "9" / "09:30"; raise ValueError otherwise."""
    if value is None or value == '':
        return None
    if not isinstance(value, str) or not _TIME_FORMAT.match(value.strip()):
        raise ValueError(f"Invalid time format: {value!r}")
    normalized = convertTo24HourFormat(value)
    if normalized is None:
        raise ValueError(f"Time out of range: {value!r}")
    return normalized


def _json_object():
    """The request body if it is a JSON object, else None."""
    body = request.get_json(silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


def _hours_from_payload(place_id, items):
    hours = []
    seen_days = set()
    for item in items:
        if not isinstance(item, dict):
            raise ValueError("Each hours entry must be an object")
        try:
            day = int(item.get('day_of_week'))
        except (TypeError, ValueError):
            raise ValueError("day_of_week must be an integer 0-6")
        if not 0 <= day <= 6:
            raise ValueError("day_of_week must be an integer 0-6")
        if day in seen_days:
            raise ValueError(f"Duplicate entry for day_of_week {day}")
        seen_days.add(day)
        record = DayHours.from_row(dict(item, place_id=place_id, day_of_week=day))
        record.open_time = _normalize_time(item.get('open_time'))
        record.close_time = _normalize_time(item.get('close_time'))
        if record.is_closed and record.is_by_appointment:
            raise ValueError(f"Day {day} cannot be both closed and by appointment")
        if record.is_closed or record.is_by_appointment:
            record.open_time = None
            record.close_time = None
        hours.append(record)
    return hours


@app.route('/api/opening-hours', methods=['GET'])
def get_opening_hours():
    """Raw rows, grouped display rows and current open status for a place."""
    place_id = _place_id_from(request.args)
    if place_id is None:
        return jsonify({"error": "Place ID is required"}), 400
    try:
        return jsonify(get_service().get_hours_summary(place_id))
    except Exception as e:
        logger.error(f"Error fetching opening hours for place {place_id}: {e}")
        return jsonify({"error": "Failed to fetch opening hours"}), 500


@app.route('/api/opening-hours', methods=['POST'])
def save_opening_hours():
    """Replace a place's hours. Body: {"placeId": 1, "hours": [{day_of_week, open_time, ...}]}."""
    body = _json_object()
    if body is None:
        return jsonify({"error": "Request body must be a JSON object"}), 400
    place_id = _place_id_from(body)
    items = body.get('hours')
    if place_id is None or not isinstance(items, list):
        return jsonify({"error": "Invalid request format. Place ID and hours information required."}), 400

    try:
        hours = _hours_from_payload(place_id, items)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    try:
        get_service().save_hours(place_id, hours)
    except StorageError as e:
        logger.error(f"Error updating opening hours for place {place_id}: {e}")
        return jsonify({"error": "Failed to update opening hours"}), 500
    return jsonify({"success": True})


@app.route('/api/opening-hours', methods=['DELETE'])
def delete_opening_hours():
    place_id = _place_id_from(request.args)
    if place_id is None:
        return jsonify({"error": "Place ID is required"}), 400
    try:
        get_service().delete_hours(place_id)
    except StorageError as e:
        logger.error(f"Error deleting opening hours for place {place_id}: {e}")
        return jsonify({"error": "Failed to delete opening hours"}), 500
    return jsonify({"success": True})


@app.route('/api/opening-hours/parse', methods=['POST'])
def parse_opening_hours():
    """Preview how free-text hours would be stored. Nothing is written."""
    body = _json_object()
    if body is None:
        return jsonify({"error": "Request body must be a JSON object"}), 400
    text = body.get('text')
    if text is not None and not isinstance(text, str):
        return jsonify({"error": "text must be a string"}), 400
    result = parseLegacyHoursWithDiagnostics(text, _place_id_from(body))
    return jsonify({
        "hours": [h.to_row() for h in result.hours],
        "skipped": [{"segment": s.segment, "reason": s.reason} for s in result.skipped],
    })


if __name__ == '__main__':
    # For development only
    app.run(host='0.0.0.0', port=int(os.getenv("PORT", "5000")), debug=True)
