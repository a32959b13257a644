# license_stamper/stamping/options.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class FooterPosition(str, Enum):
    BOTTOM = "bottom"
    DIAGONAL = "diagonal"


def normalize_position(value: str | FooterPosition | None) -> FooterPosition:
    if isinstance(value, FooterPosition):
        return value
    v = (value or "").strip().lower()
    try:
        return FooterPosition(v)
    except ValueError:
        raise ValueError(f"Unknown footer position: {value!r}")


@dataclass(frozen=True)
class StampOptions:
    """
    Fully resolved stamp parameters for one call.

    license_id, date_iso and footer_position must already carry concrete
    values; the stamper never fills in defaults.
    """
    customer_name: str
    order_number: str
    licensed_quantity: int
    license_id: str
    date_iso: str
    footer_position: FooterPosition = FooterPosition.BOTTOM
    organization: Optional[str] = None

    def footer_lines(self) -> List[str]:
        org = f" ({self.organization})" if self.organization else ""
        return [
            f"Licensed to: {self.customer_name}{org}",
            " • ".join(
                [
                    f"Order {self.order_number}",
                    f"License {self.license_id}",
                    f"Up to {self.licensed_quantity} copies",
                    self.date_iso,
                ]
            ),
        ]
