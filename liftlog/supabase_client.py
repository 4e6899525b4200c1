# liftlog/supabase_client.py

import logging
import os
from supabase import create_client, Client

logger = logging.getLogger(__name__)

url: str = os.environ.get("SUPABASE_URL")
key: str = os.environ.get("SUPABASE_KEY")

# MOCK_DB=true swaps in the in-memory store used by the test suite.
if os.environ.get("MOCK_DB", "").lower() == "true":
    from liftlog.mock_supabase import MockSupabaseClient
    logger.warning("MOCK_DB is set; using the in-memory store")
    supabase = MockSupabaseClient()
elif url and key:
    supabase: Client = create_client(url, key)
else:
    logger.warning("SUPABASE_URL / SUPABASE_KEY not set; storage is unavailable")
    supabase = None
