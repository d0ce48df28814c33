import os
from typing import Optional

def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    return float(value) if value else None

class Settings:
    # Shared storage (cache files + preferences)
    SHARED_DIR: str = os.getenv("SHARED_DIR", "data/shared")

    # Menu sources
    FB38_URL: str = os.getenv("FB38_URL", "https://fb38.squarespace.com/meny")
    N58_URL: str = os.getenv("N58_URL", "https://drittserver.net/lunsj/")

    # Online payment pages
    FB38_PAY_URL: str = os.getenv(
        "FB38_PAY_URL",
        "https://www.alreadyordered.no/fb38/content/uncode-lite_child/TemplateProductTable_pure.php",
    )
    N58_PAY_URL: str = os.getenv(
        "N58_PAY_URL",
        "https://www.goldbyopen.no/nostegaten58/content/uncode-lite_child/TemplateProductTable_pure.php",
    )

    # Scraping
    # None keeps the HTTP client's default timeout
    REQUEST_TIMEOUT: Optional[float] = _optional_float("REQUEST_TIMEOUT")
    USER_AGENT: str = os.getenv("USER_AGENT", "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15")

    # Widget schedule
    TIMEZONE: str = os.getenv("TIMEZONE", "Europe/Oslo")
    CUTOVER_HOUR: int = int(os.getenv("CUTOVER_HOUR", "13"))
    REFRESH_WEEKDAY: int = int(os.getenv("REFRESH_WEEKDAY", "0"))
    REFRESH_HOUR: int = int(os.getenv("REFRESH_HOUR", "7"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def url_for(self, location: str) -> Optional[str]:
        return {"FB38": self.FB38_URL, "N58": self.N58_URL}.get(location)

    def pay_url_for(self, location: str) -> Optional[str]:
        return {"FB38": self.FB38_PAY_URL, "N58": self.N58_PAY_URL}.get(location)

settings = Settings()
