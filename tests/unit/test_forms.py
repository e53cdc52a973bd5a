from __future__ import annotations

import asyncio
from typing import Mapping

import aiohttp

from raghad_site.config.model import FormsConfig, PageConfig
from raghad_site.page.document import Document, Form
from raghad_site.page.renderer import PageRenderer
from raghad_site.runtime.scheduler import TaskScheduler
from raghad_site.ui.forms import FormSubmitter
from raghad_site.ui.notifications import Notifier


class FakeTransport:
    def __init__(self, *, status: int = 200, exc: Exception | None = None) -> None:
        self.status = status
        self.exc = exc
        self.calls: list[tuple[str, dict[str, str]]] = []
        self.button_during: list[tuple[bool, str]] = []
        self.form: Form | None = None

    async def post(self, url: str, data: Mapping[str, str]) -> int:
        self.calls.append((url, dict(data)))
        if self.form is not None and self.form.submit_button is not None:
            button = self.form.submit_button
            self.button_during.append((button.disabled, button.text))
        await asyncio.sleep(0.01)
        if self.exc is not None:
            raise self.exc
        return self.status


def _contact_form() -> Form:
    html = PageRenderer(PageConfig(contact_form_action="/contact")).render()
    [form] = Document.from_html(html).forms()
    return form


def _submit(transport: FakeTransport, form: Form, *, times: int = 1) -> tuple[Notifier, FormSubmitter, list[bool]]:
    transport.form = form

    async def main() -> tuple[Notifier, FormSubmitter, list[bool]]:
        sched = TaskScheduler()
        notifier = Notifier(sched, visible_ms=5000)
        submitter = FormSubmitter(sched, notifier, transport, FormsConfig(sending_label="Sending..."))
        accepted = [submitter.submit(form) for _ in range(times)]
        assert form.submit_button is not None and form.submit_button.disabled
        await sched.wait_idle()
        return notifier, submitter, accepted

    return asyncio.run(main())


def test_successful_submit_sends_one_request_and_one_success_toast() -> None:
    form = _contact_form()
    form.fill(name="Sara", email="sara@example.com", message="Hello")
    transport = FakeTransport(status=200)

    notifier, submitter, _ = _submit(transport, form)

    assert transport.calls == [("/contact", {"name": "Sara", "email": "sara@example.com", "message": "Hello"})]
    assert submitter.requests == 1
    assert [t.kind for t in notifier.active] == ["success"]
    assert transport.button_during == [(True, "Sending...")]

    button = form.submit_button
    assert button is not None
    assert button.disabled is False
    assert button.text == "Send"
    # Form is reset after a successful submission.
    assert form.fields() == {"name": "", "email": "", "message": ""}


def test_error_status_shows_error_toast_and_reenables_button() -> None:
    form = _contact_form()
    form.fill(name="Sara")
    transport = FakeTransport(status=500)

    notifier, _, _ = _submit(transport, form)

    assert len(transport.calls) == 1
    assert [t.kind for t in notifier.active] == ["error"]
    assert notifier.active[0].message == FormsConfig().error_message
    button = form.submit_button
    assert button is not None and not button.disabled and button.text == "Send"
    # Failed submissions keep what the user typed.
    assert form.fields()["name"] == "Sara"


def test_transport_error_shows_error_toast() -> None:
    form = _contact_form()
    transport = FakeTransport(exc=aiohttp.ClientConnectionError("connection refused"))

    notifier, _, _ = _submit(transport, form)

    assert len(transport.calls) == 1
    assert [t.kind for t in notifier.active] == ["error"]
    assert form.submit_button is not None and not form.submit_button.disabled


def test_submit_is_ignored_while_control_is_disabled() -> None:
    form = _contact_form()
    transport = FakeTransport(status=200)

    notifier, _, accepted = _submit(transport, form, times=2)

    assert accepted == [True, False]
    assert len(transport.calls) == 1
    assert len(notifier.active) == 1
