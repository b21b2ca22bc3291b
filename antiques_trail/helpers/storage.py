import logging
from typing import Any, Dict, List, Optional

from antiques_trail.hours.models import DayHours, rows_to_day_hours
from antiques_trail.libs.supabase_client import get_client


OPENING_HOURS_FIELDS = "id,place_id,day_of_week,open_time,close_time,is_closed,is_by_appointment,notes"


class StorageError(RuntimeError):
    """A read or write against the hours tables failed."""


def _rows_for(place_id: Any, hours: List[DayHours]) -> List[Dict[str, Any]]:
    rows = []
    for h in hours:
        row = h.to_row()
        row["place_id"] = place_id
        rows.append(row)
    return rows


class StorageClient:
    def __init__(self, client=None):
        self.client = client or get_client()

    # --------------- Structured hours (opening_hours table) -----------------

    def fetch_day_hours(self, place_id: Any) -> List[DayHours]:
        """
        Return 0-7 DayHours rows for place_id ordered by day_of_week.
        Raises StorageError if the read fails.
        """
        try:
            resp = (
                self.client.table("opening_hours")
                .select(OPENING_HOURS_FIELDS)
                .eq("place_id", place_id)
                .order("day_of_week")
                .execute()
            )
        except Exception as e:
            raise StorageError(f"reading opening_hours failed for place {place_id}: {e}") from e
        rows = getattr(resp, "data", None) or []
        return rows_to_day_hours(rows)

    def load_day_hours(self, place_id: Any) -> List[DayHours]:
        """
        Same as fetch_day_hours, but read failures are logged and reported as no rows.
        Use fetch_day_hours / has_day_hours before anything that writes.
        """
        try:
            return self.fetch_day_hours(place_id)
        except StorageError as e:
            logging.warning(f"load_day_hours failed for place {place_id}: {e}")
            return []

    def has_day_hours(self, place_id: Any) -> bool:
        """True if place_id has any opening_hours rows. Raises StorageError if the read fails."""
        return bool(self.fetch_day_hours(place_id))

    def replace_day_hours(self, place_id: Any, hours: List[DayHours]) -> None:
        """
        Delete every opening_hours row for place_id, then insert `hours`.

        The current rows are read first; if the insert fails they are written
        back so the place is not left without hours. Raises StorageError on any
        failure, including a failed read before the delete.
        """
        previous = self.fetch_day_hours(place_id)
        rows = _rows_for(place_id, hours)
        try:
            self.client.table("opening_hours").delete().eq("place_id", place_id).execute()
        except Exception as e:
            logging.exception(f"Exception deleting opening_hours for place {place_id}: {e}")
            raise StorageError(f"replace_day_hours failed for place {place_id}: {e}") from e

        if not rows:
            return
        try:
            response = self.client.table("opening_hours").insert(rows).execute()
            if getattr(response, "error", None):
                raise StorageError(f"insert opening_hours failed for place {place_id}: {response.error}")
        except Exception as e:
            logging.exception(f"Exception inserting opening_hours for place {place_id}: {e}")
            self._restore_day_hours(place_id, previous)
            if isinstance(e, StorageError):
                raise
            raise StorageError(f"replace_day_hours failed for place {place_id}: {e}") from e

    def _restore_day_hours(self, place_id: Any, previous: List[DayHours]) -> None:
        if not previous:
            return
        try:
            self.client.table("opening_hours").insert(_rows_for(place_id, previous)).execute()
            logging.warning(f"Restored {len(previous)} opening_hours row(s) for place {place_id} after failed insert")
        except Exception as e:
            logging.error(f"Could not restore opening_hours for place {place_id}: {e}")

    def delete_day_hours(self, place_id: Any) -> None:
        """Delete all opening_hours rows for place_id. Raises StorageError on failure."""
        try:
            self.client.table("opening_hours").delete().eq("place_id", place_id).execute()
        except Exception as e:
            logging.exception(f"Exception during delete_day_hours for place {place_id}: {e}")
            raise StorageError(f"delete_day_hours failed for place {place_id}: {e}") from e

    # --------------- Legacy text and status (places table) -----------------

    def load_legacy_hours_text(self, place_id: Any) -> Optional[str]:
        """Return places.opening_hours for place_id, or None if absent."""
        try:
            resp = (
                self.client.table("places")
                .select("opening_hours")
                .eq("id", place_id)
                .limit(1)
                .execute()
            )
            rows = getattr(resp, "data", None) or []
            if not rows:
                return None
            return rows[0].get("opening_hours") or None
        except Exception as e:
            logging.warning(f"load_legacy_hours_text failed for place {place_id}: {e}")
            return None

    def save_legacy_hours_text(self, place_id: Any, text: str) -> None:
        """
        Write the formatted hours back to places.opening_hours.
        This is a display cache; failures are logged, not raised.
        """
        self._update_place(place_id, {"opening_hours": text}, "save_legacy_hours_text")

    def update_place_status(self, place_id: Any, is_open: bool, closing_soon: bool) -> None:
        """Store the is_open / closing_soon flags on the place row."""
        self._update_place(place_id, {"is_open": is_open, "closing_soon": closing_soon}, "update_place_status")

    def list_place_ids(self) -> List[Any]:
        """All place ids, ordered by name."""
        try:
            resp = self.client.table("places").select("id").order("name").execute()
            rows = getattr(resp, "data", None) or []
            return [r.get("id") for r in rows if r.get("id") is not None]
        except Exception as e:
            logging.warning(f"list_place_ids failed: {e}")
            return []

    def _update_place(self, place_id: Any, values: Dict[str, Any], action: str) -> None:
        try:
            response = self.client.table("places").update(values).eq("id", place_id).execute()
            if getattr(response, "error", None):
                logging.error(f"{action} failed for place {place_id}: {response.error}")
        except Exception as e:
            logging.warning(f"{action} failed for place {place_id}: {e}")
