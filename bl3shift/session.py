"""HTTP session and login against the 2K SHiFT API"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

import requests

from .config import Config
from .exceptions import AuthenticationError
from .logs import log_warning

logger = logging.getLogger(__name__)


class ShiftSession:
    """Pooled, throttled HTTP session for the SHiFT API"""

    def __init__(self, cfg: Optional[Config] = None):
        self.config = cfg or Config()
        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': self.config.user_agent,
            'Origin': self.config.origin,
            'Referer': self.config.referer,
            'Accept': 'application/json',
        })

        # Connection pooling only, failed calls are not retried
        adapter = requests.adapters.HTTPAdapter(pool_connections=4, pool_maxsize=4, max_retries=0)
        self.session.mount('http://', adapter)
        self.session.mount('https://', adapter)

        self._last_request_time = 0.0

    def _throttle(self):
        """Rate limiting for API requests"""
        elapsed = time.time() - self._last_request_time
        wait_time = max(0.0, self.config.delay_seconds - elapsed)
        if wait_time > 0:
            time.sleep(wait_time)
        self._last_request_time = time.time()

    def get(self, url: str, **kwargs) -> requests.Response:
        """Make throttled GET request"""
        self._throttle()
        kwargs.setdefault('timeout', self.config.timeout)
        logger.debug("GET %s", url)
        return self.session.get(url, **kwargs)

    def post(self, url: str, **kwargs) -> requests.Response:
        """Make throttled POST request"""
        self._throttle()
        kwargs.setdefault('timeout', self.config.timeout)
        logger.debug("POST %s", url)
        return self.session.post(url, **kwargs)

    def load_remote_config(self) -> Optional[str]:
        """Fetch the published API settings and apply them to the config.

        Returns the tool version announced there. The built-in settings stay
        in use when the file can't be fetched.
        """
        url = self.config.remote_config_url
        if not url:
            return None

        try:
            resp = self.get(url)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            log_warning(f"Could not retrieve config file, using built-in settings: {e}")
            return None
        if not isinstance(data, dict):
            log_warning("Ignoring config file: expected a JSON object")
            return None

        version = self.config.apply_remote(data)
        self.session.headers.update(self.config.request_headers)
        logger.debug("Remote config applied (version %s)", version)
        return version

    def login(self, email: str, password: str) -> "AuthenticatedSession":
        """Authenticate and return a session carrying the SHiFT session id.

        The login endpoint answers with a redirect header that must be
        followed to activate the session, and with the session id that has
        to be sent back on every authenticated call.
        """
        try:
            resp = self.post(self.config.login_url, json={'username': email, 'password': password})
        except requests.RequestException as e:
            raise AuthenticationError(f"could not submit login credentials: {e}") from e

        if resp.status_code != 200:
            raise AuthenticationError(f"login request returned unexpected status code: {resp.status_code}")

        redirect = resp.headers.get(self.config.login_redirect_header)
        if not redirect:
            raise AuthenticationError("could not find redirect header")

        session_id = resp.headers.get(self.config.session_id_header)
        if not session_id:
            raise AuthenticationError("could not find session id header")

        try:
            self.get(redirect)
        except requests.RequestException as e:
            raise AuthenticationError(f"could not get session: {e}") from e

        logger.debug("Session established (%s...)", session_id[:8])
        return AuthenticatedSession(self, self.config.session_header, session_id)


@dataclass(frozen=True)
class AuthenticatedSession:
    """An established login, handed to the clients that need it"""
    http: ShiftSession
    header: str
    session_id: str

    def _headers(self, kwargs) -> dict:
        headers = dict(kwargs.pop('headers', None) or {})
        headers[self.header] = self.session_id
        return headers

    def get(self, url: str, **kwargs) -> requests.Response:
        headers = self._headers(kwargs)
        return self.http.get(url, headers=headers, **kwargs)

    def post(self, url: str, **kwargs) -> requests.Response:
        headers = self._headers(kwargs)
        return self.http.post(url, headers=headers, **kwargs)
