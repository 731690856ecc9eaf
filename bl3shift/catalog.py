"""Public SHiFT code list (orcicorn aggregator)"""

import logging
from typing import Any, List, Optional

import requests

from .config import Config
from .exceptions import FetchError
from .models import ShiftCode

logger = logging.getLogger(__name__)

UNIVERSAL_PLATFORM = "universal"


def parse_code_entry(entry: Any) -> Optional[ShiftCode]:
    """Turn one aggregator entry into a ShiftCode, None if it has no usable code"""
    if not isinstance(entry, dict):
        return None

    code = entry.get("code")
    if not isinstance(code, str) or not code.strip():
        return None

    reward = entry.get("reward")
    reward = reward if isinstance(reward, str) else ""
    platform = entry.get("platform")
    platform = platform.strip().lower() if isinstance(platform, str) else ""

    if platform == UNIVERSAL_PLATFORM:
        return ShiftCode(code=code.strip(), reward=reward, is_universal=True)
    return ShiftCode(
        code=code.strip(),
        reward=reward,
        platforms=[platform] if platform else [],
    )


class CodeCatalog:
    """Fetches the list of known codes"""

    def __init__(self, cfg: Optional[Config] = None, session: Optional[requests.Session] = None):
        self.config = cfg or Config()
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': self.config.user_agent})

    def fetch_codes(self) -> List[ShiftCode]:
        """Fetch and normalize the code list, in the order the aggregator lists it"""
        url = self.config.code_list_url
        try:
            resp = self.session.get(url, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise FetchError(f"http request error: {e}") from e

        if resp.status_code != 200:
            raise FetchError(f"the request returned unexpected code {resp.status_code} with body {resp.text}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise FetchError(f"could not JSON decode the response: {e}") from e

        # The code list is wrapped in an array holding a single object
        if not isinstance(payload, list):
            raise FetchError("unexpected code list format: expected a JSON array")
        if not payload:
            return []

        wrapper = payload[0]
        entries = wrapper.get("codes") if isinstance(wrapper, dict) else None
        if not isinstance(entries, list):
            raise FetchError("unexpected code list format: missing 'codes' array")

        codes = []
        for entry in entries:
            shift_code = parse_code_entry(entry)
            if shift_code is None:
                logger.debug("Skipping code list entry without a code: %r", entry)
                continue
            codes.append(shift_code)

        logger.debug("Fetched %d codes from %s", len(codes), url)
        return codes
