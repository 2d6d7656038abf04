"""Runtime settings read from the environment."""

import logging
import os
import sys
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Mapping, Optional

from diamondbook.domain.errors import ValidationError

ENV_PREFIX = "DIAMONDBOOK_"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    plus_threshold: Decimal = Decimal("0.15")
    payment_terms_days: int = 30
    invoice_prefix: str = "INV"
    log_level: str = "WARNING"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from DIAMONDBOOK_* environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Settings with defaults for anything not set

    Raises:
        ValidationError: If a numeric variable cannot be parsed
    """
    env = os.environ if environ is None else environ
    defaults = Settings()

    threshold_raw = env.get(f"{ENV_PREFIX}PLUS_THRESHOLD")
    threshold = defaults.plus_threshold
    if threshold_raw:
        try:
            threshold = Decimal(threshold_raw.strip())
        except InvalidOperation:
            raise ValidationError(
                f"Invalid {ENV_PREFIX}PLUS_THRESHOLD '{threshold_raw}': expected a number"
            ) from None
        if threshold <= 0:
            raise ValidationError(f"{ENV_PREFIX}PLUS_THRESHOLD must be positive")

    terms_raw = env.get(f"{ENV_PREFIX}PAYMENT_TERMS_DAYS")
    terms = defaults.payment_terms_days
    if terms_raw:
        try:
            terms = int(terms_raw.strip())
        except ValueError:
            raise ValidationError(
                f"Invalid {ENV_PREFIX}PAYMENT_TERMS_DAYS '{terms_raw}': expected whole days"
            ) from None
        if terms < 0:
            raise ValidationError(f"{ENV_PREFIX}PAYMENT_TERMS_DAYS cannot be negative")

    prefix = (env.get(f"{ENV_PREFIX}INVOICE_PREFIX") or defaults.invoice_prefix).strip()
    log_level = (env.get(f"{ENV_PREFIX}LOG_LEVEL") or defaults.log_level).strip().upper()

    return Settings(
        plus_threshold=threshold,
        payment_terms_days=terms,
        invoice_prefix=prefix or defaults.invoice_prefix,
        log_level=log_level,
    )


def configure_logging(level: str = "WARNING") -> None:
    """Send diamondbook logs to stderr at the given level."""
    root = logging.getLogger("diamondbook")
    root.setLevel(level.upper())
    for handler in root.handlers:
        if getattr(handler, "_diamondbook", False):
            # sys.stderr may have been swapped since the last call
            handler.setStream(sys.stderr)
            return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._diamondbook = True
    root.addHandler(handler)
