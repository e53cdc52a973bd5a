from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol
from urllib.parse import urljoin

import aiohttp

from raghad_site.config.model import FormsConfig
from raghad_site.core.errors import FormSubmissionError, HttpStatusError
from raghad_site.page.document import Document, Form
from raghad_site.runtime.scheduler import TaskScheduler
from raghad_site.ui.notifications import Notifier


logger = logging.getLogger(__name__)


def _is_ok(status: int) -> bool:
    return 200 <= status < 300


class FormTransport(Protocol):
    async def post(self, url: str, data: Mapping[str, str]) -> int: ...


class AiohttpTransport:
    """POSTs form fields with aiohttp and reports the response status.

    Relative form actions are resolved against ``base_url``. The session is
    created lazily and owned by the transport unless one is passed in.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout_s: float = 10.0,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = aiohttp.ClientTimeout(total=timeout_s)
        self._session = session
        self._owns_session = session is None

    def _resolve(self, url: str) -> str:
        return urljoin(self._base_url, url) if self._base_url else url

    async def post(self, url: str, data: Mapping[str, str]) -> int:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        async with self._session.post(self._resolve(url), data=dict(data)) as resp:
            await resp.read()
            return resp.status

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "AiohttpTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.close()


def transport_from_config(cfg: FormsConfig, *, base_url: str | None = None) -> AiohttpTransport:
    return AiohttpTransport(base_url=base_url, timeout_s=cfg.timeout_s)


async def request_json(
    session: aiohttp.ClientSession,
    url: str,
    *,
    method: str = "GET",
    headers: Mapping[str, str] | None = None,
    json_body: Any = None,
) -> Any:
    """JSON request helper: raises HttpStatusError on any non-2xx status."""

    merged = {"Content-Type": "application/json", **(headers or {})}
    async with session.request(method, url, headers=merged, json=json_body) as resp:
        if not _is_ok(resp.status):
            raise HttpStatusError(resp.status, url=url)
        return await resp.json(content_type=None)


class FormSubmitter:
    """Submit page forms in the background with user feedback.

    One submit sends exactly one POST and ends with exactly one toast. The
    submit control is disabled, with a "sending" label, for the whole
    in-flight window and restored afterwards whatever the outcome.
    """

    def __init__(
        self,
        scheduler: TaskScheduler,
        notifier: Notifier,
        transport: FormTransport,
        cfg: FormsConfig | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._notifier = notifier
        self._transport = transport
        self._cfg = cfg or FormsConfig()
        self.forms: list[Form] = []
        self.requests = 0

    def attach(self, document: Document) -> int:
        self.forms = document.forms()
        return len(self.forms)

    def submit(self, form: Form) -> bool:
        """Handle a submit event. Returns False when the control is disabled."""

        button = form.submit_button
        if button is not None and button.disabled:
            logger.debug("form_submit_ignored", extra={"action": form.action})
            return False

        original_label = button.text if button is not None else ""
        if button is not None:
            button.text = self._cfg.sending_label
            button.disabled = True

        self._scheduler.enqueue(lambda: self._send(form, original_label))
        return True

    async def _send(self, form: Form, original_label: str) -> None:
        button = form.submit_button
        try:
            self.requests += 1
            status = await self._transport.post(form.action, form.fields())
            if not _is_ok(status):
                raise FormSubmissionError("Form submission failed", action=form.action, status=status)
        except Exception as e:  # noqa: BLE001
            logger.warning("form_submit_failed", extra={"action": form.action, "error": str(e)})
            self._notifier.show(self._cfg.error_message, "error")
        else:
            logger.info("form_submitted", extra={"action": form.action})
            self._notifier.show(self._cfg.success_message, "success")
            form.reset()
        finally:
            if button is not None:
                button.text = original_label
                button.disabled = False
