# license_stamper/services/stamp_request.py
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from license_stamper.services.keys import new_license_id, utc_day
from license_stamper.stamping.options import FooterPosition, StampOptions


class StampRequest(BaseModel):
    """
    Raw stamp fields as they arrive from a form or the command line.
    to_options() fills in license id / date and hands back resolved StampOptions.
    """

    model_config = ConfigDict(frozen=True)

    customer_name: str = Field(min_length=1)
    order_number: str = Field(min_length=1)
    licensed_quantity: int = Field(gt=0)
    organization: Optional[str] = None
    license_id: Optional[str] = None
    date: Optional[str] = None
    footer_position: FooterPosition = FooterPosition.BOTTOM

    @field_validator("organization", "license_id", "date", mode="before")
    @classmethod
    def _blank_is_missing(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("footer_position", mode="before")
    @classmethod
    def _default_position(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return FooterPosition.BOTTOM
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def to_options(self) -> StampOptions:
        return StampOptions(
            customer_name=self.customer_name,
            order_number=self.order_number,
            licensed_quantity=self.licensed_quantity,
            organization=self.organization,
            license_id=self.license_id or new_license_id(),
            date_iso=self.date or utc_day(),
            footer_position=self.footer_position,
        )
