# license_stamper/services/keys.py
from __future__ import annotations

import uuid
from datetime import datetime, timezone

STAMPED_FILENAME = "stamped.pdf"


def utc_day() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def new_license_id() -> str:
    return str(uuid.uuid4())


def attachment_disposition() -> str:
    return f'attachment; filename="{STAMPED_FILENAME}"'
