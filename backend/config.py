"""Centralized configuration — all env vars in one place."""

import os

DEFAULT_PRIMARY_SHEET_ID = "15Sh8QPFF_r-oY9qtUPiSPpDBQlhXtn_y"
DEFAULT_EXPORT_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=xlsx&id={sheet_id}"

# Logical ad field -> candidate sheet headers, first match wins
ADS_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "title": ("Title", "title", "TITLE", "Heading"),
    "message": ("Message", "message", "Description", "description", "Text"),
    "imageUrl": ("Image URL", "ImageUrl", "imageUrl", "Image", "image"),
    "actionLink": ("Action Link", "ActionLink", "actionLink", "Link", "link", "URL"),
    "actionText": ("Action Text", "ActionText", "actionText", "Button", "button"),
}
ADS_PLACEHOLDER_IMAGE = "https://placehold.co/600x300?text={text}"
ADS_DEFAULT_ACTION_TEXT = "Learn More"
ADS_DEFAULT_ACTION_LINK = "#"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.port: int = int(os.getenv("PORT", "5000"))
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        # Spreadsheet sources
        self.primary_sheet_id: str = os.getenv("PRIMARY_SHEET_ID", DEFAULT_PRIMARY_SHEET_ID)
        self.ads_sheet_id: str | None = os.getenv("ADS_SHEET_ID")
        self.export_url_template: str = os.getenv("SHEET_EXPORT_URL", DEFAULT_EXPORT_URL)
        self.fetch_timeout_seconds: float = float(os.getenv("FETCH_TIMEOUT_SECONDS", "30"))

        # Cache
        self.cache_ttl_seconds: float = float(os.getenv("CACHE_TTL_SECONDS", "300"))
        self.cache_single_flight: bool = _env_bool("CACHE_SINGLE_FLIGHT", True)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def dataset_sources(self) -> dict[str, str]:
        """Dataset key -> sheet id for every configured source."""
        sources = {"primary": self.primary_sheet_id}
        if self.ads_sheet_id:
            sources["ads"] = self.ads_sheet_id
        return sources

    def validate(self) -> list[str]:
        """Return list of missing env vars for optional features."""
        required = ["ADS_SHEET_ID"]
        return [var for var in required if not getattr(self, _attr_for(var))]


settings = Settings()


def _attr_for(env_var: str) -> str:
    """Map env var name to Settings attribute name."""
    mapping = {
        "ADS_SHEET_ID": "ads_sheet_id",
        "PRIMARY_SHEET_ID": "primary_sheet_id",
    }
    return mapping.get(env_var, env_var.lower())
