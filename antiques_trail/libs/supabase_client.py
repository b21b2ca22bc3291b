import os
from supabase import create_client, Client
from dotenv import load_dotenv
import httpx


# Load environment variables from .env
load_dotenv()

_client: Client | None = None


def _init_client() -> Client:
    """
    Initialize and return a Supabase client using env variables.
    Raises RuntimeError if credentials are missing.
    """
    global _client

    if _client is not None:
        return _client

    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_SERVICE_KEY")
    if not url or not key:
        raise RuntimeError(
            "Supabase credentials are missing. Ensure SUPABASE_URL and SUPABASE_SERVICE_KEY are set in the environment."
        )

    _client = create_client(url, key)
    # Longer timeouts on the underlying httpx session for slow connections
    _client.postgrest.session.timeout = httpx.Timeout(30.0, connect=30.0)
    return _client


def get_client() -> Client:
    """
    Retrieve the singleton Supabase client instance.
    """
    return _init_client()


def check_connection() -> bool:
    """
    Validate Supabase connection by reading one opening_hours row.
    Returns True if successful, raises RuntimeError otherwise.
    """
    try:
        client = get_client()
        client.table("opening_hours").select("id").limit(1).execute()
        return True
    except Exception as e:
        raise RuntimeError(f"Supabase connection failed: {e}")


def _places_table_schema() -> dict:
    """
    Columns of the 'places' table used by the hours modules.
    """
    return {
        "name": "places",
        "columns": {
            "id": "integer primary key",
            "name": "text",
            # Legacy free-text hours, kept in sync with opening_hours rows
            "opening_hours": "text",
            "is_open": "boolean",
            "closing_soon": "boolean",
        }
    }


def _opening_hours_table_schema() -> dict:
    """
    Define schema for the 'opening_hours' table.
    """
    return {
        "name": "opening_hours",
        "columns": {
            "id": "integer primary key",
            "place_id": "integer not null references places(id) on delete cascade",
            # 0 = Sunday, 1 = Monday, ... 6 = Saturday
            "day_of_week": "integer not null",
            # HH:MM, 24-hour
            "open_time": "text",
            "close_time": "text",
            "is_closed": "boolean default false",
            "is_by_appointment": "boolean default false",
            "notes": "text",
        }
    }


def ensure_table_exists(table_schema: dict | None = None) -> None:
    """
    Ensure a table exists in the Supabase database.

    Args:
        table_schema (dict): Dictionary with `name` and `columns` definitions,
            e.g. _opening_hours_table_schema().
    """
    if not table_schema:
        raise ValueError("table_schema is required.")
    table_name = table_schema.get("name")
    if not table_name:
        raise ValueError("table_schema must include a 'name' field.")

    client = get_client()
    try:
        _ = client.table(table_name).select("id").limit(1).execute()
    except Exception:
        raise RuntimeError(
            f"Table '{table_name}' does not exist in Supabase. Please create it via migrations or the dashboard."
        )
