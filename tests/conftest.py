from __future__ import annotations

import logging
from typing import Iterator

import pytest

from raghad_site.config.model import PageConfig, SiteConfig


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    # The CLI reconfigures root logging; keep that from leaking across tests.
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def site_cfg() -> SiteConfig:
    return SiteConfig(
        page=PageConfig(template_directory_uri="/theme", contact_form_action="/contact"),
    )
