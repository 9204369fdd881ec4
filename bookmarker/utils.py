"""
Helpers used by the command line around the store: URL validation,
page title lookup and opening URLs in the default browser.
"""
import logging
import re
import time
import webbrowser
from typing import Optional

import requests
from bs4 import BeautifulSoup

from bookmarker.config import get_config
from bookmarker.errors import BrowserOpenError, InvalidURLError, TitleFetchError

logger = logging.getLogger(__name__)

# Scheme is optional so bare hosts like "google.com" are accepted
URL_PATTERN = re.compile(
    r"^(https?://)?"
    r"(www\.)?"
    r"[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z]{2,63}"
    r"(:\d{1,5})?"
    r"([/?#][-a-zA-Z0-9()@:%_+.~#?&/=;,!$'*\[\]]*)?$"
)


def is_valid_url(url: Optional[str]) -> bool:
    """Check that a string looks like an absolute web address."""
    if not url:
        return False
    return URL_PATTERN.match(url.strip()) is not None


def validate_url(url: str) -> str:
    """
    Validate a URL and return it stripped of surrounding whitespace.

    Raises:
        InvalidURLError: The URL is not well formed
    """
    if not is_valid_url(url):
        raise InvalidURLError(url)
    return url.strip()


def ensure_scheme(url: str) -> str:
    """Prefix bare hosts with https:// so they can be fetched or opened."""
    if re.match(r"^[a-zA-Z][a-zA-Z0-9+.-]*://", url):
        return url
    return f"https://{url}"


def fetch_title(url: str, timeout: Optional[int] = None) -> str:
    """
    Fetch the <title> of a web page.

    Args:
        url: Page to fetch (https:// is assumed when no scheme is given)
        timeout: Request timeout in seconds (config default if not provided)

    Returns:
        The stripped page title

    Raises:
        TitleFetchError: The request failed or the page has no title
    """
    config = get_config()
    target = ensure_scheme(url)

    started = time.monotonic()
    try:
        response = requests.get(
            target,
            timeout=timeout or config.timeout,
            headers={"User-Agent": config.user_agent},
            verify=config.verify_ssl
        )
    except requests.RequestException as exc:
        raise TitleFetchError(f"failed to get url {target}: {exc}") from exc
    logger.debug("HTTP GET %s took %.2fs", target, time.monotonic() - started)

    if response.status_code != requests.codes.ok:
        raise TitleFetchError(f"failed to get url {target}: HTTP {response.status_code}")

    soup = BeautifulSoup(response.text, "html.parser")
    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag else ""
    if not title:
        raise TitleFetchError(f"title not found: {target}")
    return title


def open_url(url: str) -> None:
    """
    Open a URL in the platform's default browser.

    Raises:
        BrowserOpenError: No browser could be launched
    """
    target = ensure_scheme(url)
    try:
        opened = webbrowser.open(target)
    except webbrowser.Error as exc:
        raise BrowserOpenError(f"failed to open url {target}: {exc}") from exc
    if not opened:
        raise BrowserOpenError(f"failed to open url {target}: no runnable browser found")
