# liftlog/utils/db.py

import logging
from datetime import datetime, timezone

from liftlog.errors import PersistenceFailure

logger = logging.getLogger(__name__)


def execute(query, action):
    """
    Run a Supabase query builder, turning any client error into PersistenceFailure.

    Args:
        query: A PostgREST request builder (anything with .execute()).
        action (str): Short description used in the log line, e.g. "fetching profile".

    Returns:
        The client response (with .data and, for counted selects, .count).
    """
    try:
        return query.execute()
    except Exception as e:
        logger.error(f"Error {action}: {e}")
        raise PersistenceFailure() from e


def first_row(response):
    return response.data[0] if response.data else None


def utc_now_iso():
    return datetime.now(timezone.utc).isoformat()


def utc_today():
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")
