from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from raghad_site.core.errors import ConfigError


@dataclass(frozen=True, slots=True)
class PageConfig:
    title: str = "Raghad Company - Business Solutions in Gulf Markets"
    template_directory_uri: str = "/wp-content/themes/raghad"
    lang: str = "en"
    dir: str = "ltr"
    lazy_images: bool = True
    scripts: tuple[str, ...] = ()
    content_path: str | None = None
    contact_form_action: str | None = None


@dataclass(frozen=True, slots=True)
class SchedulerConfig:
    slice_budget_ms: float = 5.0
    long_task_ms: float = 50.0


@dataclass(frozen=True, slots=True)
class UiConfig:
    resize_debounce_ms: int = 250
    frame_interval_ms: int = 16
    navbar_scrolled_offset: int = 100
    mobile_breakpoint: int = 768


@dataclass(frozen=True, slots=True)
class NotificationsConfig:
    visible_ms: int = 5000
    transition_ms: int = 300


@dataclass(frozen=True, slots=True)
class FormsConfig:
    sending_label: str = "جاري الإرسال..."
    success_message: str = "تم إرسال الرسالة بنجاح!"
    error_message: str = "حدث خطأ في الإرسال"
    timeout_s: float = 10.0


@dataclass(frozen=True, slots=True)
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 8080
    assets_dir: str | None = None


@dataclass(frozen=True, slots=True)
class StorageConfig:
    path: str = ".raghad/local_storage.json"


@dataclass(frozen=True, slots=True)
class SiteConfig:
    page: PageConfig = field(default_factory=PageConfig)
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)
    ui: UiConfig = field(default_factory=UiConfig)
    notifications: NotificationsConfig = field(default_factory=NotificationsConfig)
    forms: FormsConfig = field(default_factory=FormsConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)


def _section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError("must be a mapping", path=key)
    return value


def _number(value: Any, *, path: str) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"must be a number, got {value!r}", path=path)
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"must be a number, got {value!r}", path=path) from e


def _positive(value: Any, *, path: str) -> float:
    number = _number(value, path=path)
    if number <= 0:
        raise ConfigError(f"must be > 0, got {value!r}", path=path)
    return number


def _int(value: Any, *, path: str) -> int:
    number = _number(value, path=path)
    if not number.is_integer():
        raise ConfigError(f"must be an integer, got {value!r}", path=path)
    return int(number)


def _non_negative_int(value: Any, *, path: str) -> int:
    number = _int(value, path=path)
    if number < 0:
        raise ConfigError(f"must be >= 0, got {value!r}", path=path)
    return number


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _bool(value: Any, *, path: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"must be a boolean, got {value!r}", path=path)


def _opt_str(d: Mapping[str, Any], key: str) -> str | None:
    value = d.get(key)
    return str(value) if value is not None else None


def site_config_from_mapping(raw: Mapping[str, Any]) -> SiteConfig:
    """Build the typed config from an expanded YAML mapping.

    Missing sections fall back to defaults; present values are validated.
    """

    defaults = SiteConfig()

    site = _section(raw, "site")
    contact = _section(raw, "contact")
    scripts = site.get("scripts", [])
    if not isinstance(scripts, list) or not all(isinstance(s, str) for s in scripts):
        raise ConfigError("must be a list of strings", path="site.scripts")

    d_page = defaults.page
    page = PageConfig(
        title=str(site.get("title", d_page.title)),
        template_directory_uri=str(site.get("template_directory_uri", d_page.template_directory_uri)).rstrip("/"),
        lang=str(site.get("lang", d_page.lang)),
        dir=str(site.get("dir", d_page.dir)),
        lazy_images=_bool(site.get("lazy_images", d_page.lazy_images), path="site.lazy_images"),
        scripts=tuple(scripts),
        content_path=_opt_str(site, "content_path"),
        contact_form_action=_opt_str(contact, "form_action"),
    )
    if page.dir not in {"ltr", "rtl"}:
        raise ConfigError(f"must be 'ltr' or 'rtl', got {page.dir!r}", path="site.dir")

    sched_raw = _section(raw, "scheduler")
    d_sched = defaults.scheduler
    scheduler = SchedulerConfig(
        slice_budget_ms=_positive(
            sched_raw.get("slice_budget_ms", d_sched.slice_budget_ms), path="scheduler.slice_budget_ms"
        ),
        long_task_ms=_positive(sched_raw.get("long_task_ms", d_sched.long_task_ms), path="scheduler.long_task_ms"),
    )

    ui_raw = _section(raw, "ui")
    d_ui = defaults.ui
    ui = UiConfig(
        resize_debounce_ms=int(_positive(ui_raw.get("resize_debounce_ms", d_ui.resize_debounce_ms), path="ui.resize_debounce_ms")),
        frame_interval_ms=int(_positive(ui_raw.get("frame_interval_ms", d_ui.frame_interval_ms), path="ui.frame_interval_ms")),
        navbar_scrolled_offset=_non_negative_int(
            ui_raw.get("navbar_scrolled_offset", d_ui.navbar_scrolled_offset), path="ui.navbar_scrolled_offset"
        ),
        mobile_breakpoint=_non_negative_int(
            ui_raw.get("mobile_breakpoint", d_ui.mobile_breakpoint), path="ui.mobile_breakpoint"
        ),
    )

    notif_raw = _section(raw, "notifications")
    d_notif = defaults.notifications
    notifications = NotificationsConfig(
        visible_ms=int(_positive(notif_raw.get("visible_ms", d_notif.visible_ms), path="notifications.visible_ms")),
        transition_ms=_non_negative_int(
            notif_raw.get("transition_ms", d_notif.transition_ms), path="notifications.transition_ms"
        ),
    )

    forms_raw = _section(raw, "forms")
    d_forms = defaults.forms
    forms = FormsConfig(
        sending_label=str(forms_raw.get("sending_label", d_forms.sending_label)),
        success_message=str(forms_raw.get("success_message", d_forms.success_message)),
        error_message=str(forms_raw.get("error_message", d_forms.error_message)),
        timeout_s=_positive(forms_raw.get("timeout_s", d_forms.timeout_s), path="forms.timeout_s"),
    )

    server_raw = _section(raw, "server")
    d_server = defaults.server
    port = _int(server_raw.get("port", d_server.port), path="server.port")
    if not 0 < port < 65536:
        raise ConfigError(f"must be a TCP port, got {port}", path="server.port")
    server = ServerConfig(
        host=str(server_raw.get("host", d_server.host)),
        port=port,
        assets_dir=_opt_str(server_raw, "assets_dir"),
    )

    storage_raw = _section(raw, "storage")
    storage = StorageConfig(path=str(storage_raw.get("path", defaults.storage.path)))

    return SiteConfig(
        page=page,
        scheduler=scheduler,
        ui=ui,
        notifications=notifications,
        forms=forms,
        server=server,
        storage=storage,
    )
