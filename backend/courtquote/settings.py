"""Runtime configuration read from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    """Service settings.

    Build from the environment with :meth:`from_env`; tests construct it
    directly.
    """

    rate_table_name: str = "default"
    quotation_prefix: str = "QTN"
    cors_origins: tuple[str, ...] = ("http://localhost:3000",)

    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = field(default="", repr=False)
    smtp_from_email: str = ""
    smtp_from_name: str = "Nexora Group"
    smtp_timeout: float = 30.0

    company_name: str = "Nexora Group"
    company_tagline: str = "Sports Infrastructure Solutions"
    company_address: str = ""
    company_phone: str = ""
    company_email: str = ""
    company_website: str = ""

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_host)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Read settings from *environ* (defaults to ``os.environ``).

        Raises:
            ValueError: If ``SMTP_PORT`` or ``SMTP_TIMEOUT`` is not a number.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        def get(key: str, default: str) -> str:
            return env.get(key, "").strip() or default

        try:
            smtp_port = int(get("SMTP_PORT", str(defaults.smtp_port)))
            smtp_timeout = float(get("SMTP_TIMEOUT", str(defaults.smtp_timeout)))
        except ValueError as exc:
            msg = f"Invalid SMTP setting: {exc}"
            raise ValueError(msg) from exc

        cors = env.get("CORS_ORIGINS", "").strip()
        return cls(
            rate_table_name=get("RATE_TABLE_NAME", defaults.rate_table_name),
            quotation_prefix=get("QUOTATION_PREFIX", defaults.quotation_prefix),
            cors_origins=_split_csv(cors) if cors else defaults.cors_origins,
            smtp_host=get("SMTP_HOST", ""),
            smtp_port=smtp_port,
            smtp_user=get("SMTP_USER", ""),
            smtp_password=env.get("SMTP_PASSWORD", ""),
            smtp_from_email=get("SMTP_FROM_EMAIL", ""),
            smtp_from_name=get("SMTP_FROM_NAME", defaults.smtp_from_name),
            smtp_timeout=smtp_timeout,
            company_name=get("COMPANY_NAME", defaults.company_name),
            company_tagline=get("COMPANY_TAGLINE", defaults.company_tagline),
            company_address=get("COMPANY_ADDRESS", ""),
            company_phone=get("COMPANY_PHONE", ""),
            company_email=get("COMPANY_EMAIL", ""),
            company_website=get("COMPANY_WEBSITE", ""),
        )
