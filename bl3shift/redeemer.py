"""Authenticated calls to the 2K SHiFT API: platforms, code info and redemption"""

import logging
import time
from typing import Any, List, Optional

import requests

from .config import Config
from .exceptions import FetchError
from .models import RedemptionResult, RedemptionStatus, unique_platforms
from .session import AuthenticatedSession

logger = logging.getLogger(__name__)


def classify_error(error_msg: str) -> RedemptionStatus:
    """Classify a failed redemption message.

    The API gives no dedicated status for codes that were already redeemed,
    so the wording of the message is the only signal available.
    """
    if "already" in error_msg.lower():
        return RedemptionStatus.ALREADY_REDEEMED
    return RedemptionStatus.FAILED


def _decode_error(resp: requests.Response) -> str:
    """'<code> - <message>' from an API error body"""
    try:
        body = resp.json()
    except ValueError as e:
        return f"INTERNAL - could not JSON decode the error: {e}"

    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        return f"INTERNAL - unexpected error body {resp.text}"
    return f"{error.get('code') or 'UNKNOWN'} - {error.get('message') or 'no message'}"


def _job_errors(body: Any) -> Optional[str]:
    """Error text of a finished redemption job, None when it succeeded"""
    if not isinstance(body, dict) or body.get("success", True) is not False:
        return None
    errors = body.get("errors")
    if isinstance(errors, list) and errors:
        return ", ".join(str(e) for e in errors)
    return "redemption job reported a failure"


class ShiftClient:
    """Talks to the SHiFT API on behalf of a logged in user"""

    def __init__(self, session: AuthenticatedSession, cfg: Optional[Config] = None):
        self.session = session
        self.config = cfg or session.http.config

    def _url(self, path: str) -> str:
        return f"{self.config.api_url}/{path}"

    def _get_json(self, resp: requests.Response) -> Any:
        if resp.status_code != 200:
            raise FetchError(f"the request returned unexpected code {resp.status_code} with body {resp.text}")
        try:
            return resp.json()
        except ValueError as e:
            raise FetchError(f"could not JSON decode the response: {e}") from e

    def get_user_platforms(self) -> List[str]:
        """Platforms linked to the account, in the order the API reports them"""
        try:
            resp = self.session.post(self._url("users/me"))
        except requests.RequestException as e:
            raise FetchError(f"http request error: {e}") from e

        body = self._get_json(resp)
        platforms = body.get("platforms") if isinstance(body, dict) else None
        if not isinstance(platforms, list):
            raise FetchError("unexpected user info format: missing 'platforms' list")

        owned = unique_platforms(p for p in platforms if isinstance(p, str))
        return [p for p in owned if p not in self.config.excluded_platforms]

    def get_code_platforms(self, code: str) -> List[str]:
        """Platforms a single code can be redeemed on"""
        try:
            resp = self.session.get(self._url(f"code/{code}/info"))
        except requests.RequestException as e:
            raise FetchError(f"http request error: {e}") from e

        body = self._get_json(resp)
        offers = body.get("entitlement_offer_codes") if isinstance(body, dict) else None
        if not isinstance(offers, list):
            raise FetchError("unexpected code info format: missing 'entitlement_offer_codes' list")

        platforms = []
        for offer in offers:
            if not isinstance(offer, dict) or not isinstance(offer.get("offer_service"), str):
                continue
            if offer.get("offer_title") != self.config.game_code_name:
                continue
            if offer.get("is_active") is True or self.config.allow_inactive:
                platforms.append(offer["offer_service"])
        return unique_platforms(platforms)

    def redeem(self, code: str, platform: str) -> RedemptionResult:
        """Redeem the given code on the given platform.

        Redemption creates a job on /redeem/:platform, the job status is then
        checked at /job/:job-id once it had time to finish.
        """
        logger.debug("Redeeming %s on %s", code, platform)
        try:
            message = self._redeem(code, platform)
        except requests.RequestException as e:
            message = f"http request to redeem the code failed: {e}"

        if message is None:
            return RedemptionResult(code, platform, RedemptionStatus.SUCCESS, "redeemed")
        return RedemptionResult(code, platform, classify_error(message), message)

    def _redeem(self, code: str, platform: str) -> Optional[str]:
        """None on success, otherwise the failure message"""
        resp = self.session.post(self._url(f"code/{code}/redeem/{platform}"))
        if resp.status_code != 201:
            return (f"the request to redeem the code returned an unexpected code "
                    f"{resp.status_code} with error {_decode_error(resp)}")

        try:
            job = resp.json()
        except ValueError as e:
            return f"could not JSON decode the redemption job: {e}"
        job_id = job.get("job_id") if isinstance(job, dict) else None
        if not job_id:
            return "the redemption job has no id"

        # wait to make sure the job has finished
        wait = job.get("max_wait_milliseconds")
        if isinstance(wait, (int, float)) and wait > 0:
            time.sleep(wait / 1000)

        resp = self.session.get(self._url(f"code/{code}/job/{job_id}"))
        if resp.status_code != 200:
            return (f"the request to check the redemption returned an unexpected code "
                    f"{resp.status_code} with body {resp.text}")

        try:
            body = resp.json()
        except ValueError:
            # A 200 without a JSON body means the job went through
            return None
        return _job_errors(body)
