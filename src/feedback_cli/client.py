import asyncio
import enum
import logging
from typing import Optional

import httpx

from feedback_cli.utils import Config, FormData, SubmitResult

logger = logging.getLogger(__name__)

ENDPOINT_PREFIX = "https://formspree.io/f/"
MIN_ENDPOINT_LENGTH = 25


class TransportMode(enum.Enum):
    LIVE = "live"
    SIMULATED = "simulated"


def resolve_transport_mode(endpoint: Optional[str]) -> TransportMode:
    if not endpoint or not endpoint.startswith(ENDPOINT_PREFIX) or len(endpoint) < MIN_ENDPOINT_LENGTH:
        logger.warning("Form endpoint %r is not configured correctly, switching to demo mode.", endpoint or "")
        return TransportMode.SIMULATED
    return TransportMode.LIVE


# ========== Transports ==========
class HttpClient:
    def __init__(self, cfg: Config, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.cfg = cfg
        self._transport = transport

    async def submit(self, form: FormData) -> SubmitResult:
        async with httpx.AsyncClient(
                timeout=self.cfg.timeout,
                verify=self.cfg.verify_tls,
                transport=self._transport,
        ) as client:
            try:
                resp = await client.post(self.cfg.endpoint, json=form.as_payload())
            except httpx.HTTPError as e:
                logger.error("Request to %s failed: %s", self.cfg.endpoint, e)
                return SubmitResult(ok=False, status_code=None, text="", error=str(e) or e.__class__.__name__)

        if resp.is_success:
            logger.debug("Form accepted: %s %s", resp.status_code, resp.text)
            return SubmitResult(ok=True, status_code=resp.status_code, text=resp.text)
        logger.error("Form rejected with status %s", resp.status_code)
        return SubmitResult(ok=False, status_code=resp.status_code, text=resp.text)


class SimulatedClient:
    def __init__(self, cfg: Config):
        self.cfg = cfg

    async def submit(self, form: FormData) -> SubmitResult:
        await asyncio.sleep(self.cfg.simulated_delay)
        logger.info("DEMO MODE: simulating a successful submission")
        logger.info("Data that would have been sent: %s", form.as_payload())
        return SubmitResult(ok=True, status_code=None, text="simulated")


def build_transport(cfg: Config, mode: TransportMode):
    if mode is TransportMode.LIVE:
        return HttpClient(cfg)
    return SimulatedClient(cfg)
