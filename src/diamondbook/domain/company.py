"""Company details domain service."""

import logging
from typing import Optional

from diamondbook.database.base import Database
from diamondbook.domain.entities import CompanyDetails
from diamondbook.domain.errors import ValidationError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("company_name", "address", "bank_name", "account_number", "ifsc_code")


class CompanyService:
    """Service for the company profile printed on invoices."""

    def __init__(self, db: Database):
        self.db = db

    def save_details(
        self,
        company_name: str,
        address: str,
        bank_name: str,
        account_number: str,
        ifsc_code: str,
        branch: Optional[str] = None,
        account_holder_name: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        gst_number: Optional[str] = None,
    ) -> int:
        """Create or replace the company profile.

        Returns:
            Company details ID

        Raises:
            ValidationError: If a required field is blank
        """
        values = {
            "company_name": company_name,
            "address": address,
            "bank_name": bank_name,
            "account_number": account_number,
            "ifsc_code": ifsc_code,
            "branch": branch,
            "account_holder_name": account_holder_name,
            "phone": phone,
            "email": email,
            "gst_number": gst_number,
        }
        values = {key: value.strip() if isinstance(value, str) else value for key, value in values.items()}

        missing = [name for name in REQUIRED_FIELDS if not values[name]]
        if missing:
            raise ValidationError(f"Missing required company field(s): {', '.join(missing)}")
        values["ifsc_code"] = values["ifsc_code"].upper()
        if values["gst_number"]:
            values["gst_number"] = values["gst_number"].upper()

        company_id = self.db.save_company_details(**values)
        logger.info("Saved company details for %s", values["company_name"])
        return company_id

    def get_details(self) -> Optional[CompanyDetails]:
        """Company profile, or None if it has not been set up."""
        return self.db.get_company_details()
