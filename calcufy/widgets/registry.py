"""Widget registry: the markup documents served for each interaction stage."""

from pathlib import Path
from typing import Dict, List, Optional, Union

from calcufy.core.models import Stage, WidgetDescriptor
from calcufy.utils.logger import logger

WIDGET_MIME_TYPE = "text/html+skybridge"

# (name, title) in stage order
WIDGETS = [
    ("operation-selector", "Operation Selector"),
    ("number-input", "Number Input"),
    ("result-display", "Result Display"),
]

STAGE_WIDGETS = {
    Stage.AWAITING_OPERATION: "operation-selector",
    Stage.AWAITING_OPERANDS: "number-input",
    Stage.COMPLETED: "result-display",
}

REMOTE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<link rel="stylesheet" href="{base_url}/assets/{name}.css">
</head>
<body>
<div id="root"></div>
<script type="module" src="{base_url}/assets/{name}.js"></script>
</body>
</html>
"""


class WidgetNotFoundError(LookupError):
    """Raised when widget markup or a widget URI cannot be resolved."""


def widget_uri(name: str) -> str:
    return f"ui://widget/{name}.html"


def remote_markup(name: str, title: str, base_url: str) -> str:
    """Generate an HTML shell that loads the bundled widget from ``base_url``."""
    return REMOTE_TEMPLATE.format(name=name, title=title, base_url=base_url.rstrip("/"))


def local_markup(name: str, assets_dir: Union[str, Path]) -> str:
    """Read pre-built widget HTML from ``assets_dir``."""
    html_path = Path(assets_dir) / f"{name}.html"
    if not html_path.is_file():
        raise WidgetNotFoundError(f"Widget HTML not found: {html_path}")
    return html_path.read_text(encoding="utf-8")


class WidgetRegistry:
    """Immutable set of widgets, built once at start-up and shared read-only."""

    def __init__(self, widgets: List[WidgetDescriptor]):
        self._by_uri: Dict[str, WidgetDescriptor] = {w.uri: w for w in widgets}
        self._by_name: Dict[str, WidgetDescriptor] = {w.name: w for w in widgets}

    @classmethod
    def from_remote(cls, base_url: str) -> "WidgetRegistry":
        return cls(
            [
                WidgetDescriptor(
                    name=name,
                    uri=widget_uri(name),
                    title=title,
                    html=remote_markup(name, title, base_url),
                )
                for name, title in WIDGETS
            ]
        )

    @classmethod
    def from_directory(cls, assets_dir: Union[str, Path]) -> "WidgetRegistry":
        return cls(
            [
                WidgetDescriptor(
                    name=name,
                    uri=widget_uri(name),
                    title=title,
                    html=local_markup(name, assets_dir),
                )
                for name, title in WIDGETS
            ]
        )

    @classmethod
    def from_settings(cls, settings) -> "WidgetRegistry":
        """Build the registry from the configured asset source."""
        if settings.widget_source == "local":
            registry = cls.from_directory(settings.assets_dir)
            logger.info(f"Loaded {len(registry)} widgets from {settings.assets_dir}")
        else:
            registry = cls.from_remote(settings.base_url)
            logger.info(f"Generated {len(registry)} widgets for asset host {settings.base_url}")
        return registry

    def __len__(self) -> int:
        return len(self._by_uri)

    def list_widgets(self) -> List[WidgetDescriptor]:
        return list(self._by_uri.values())

    def get(self, uri: str) -> Optional[WidgetDescriptor]:
        """Exact-match lookup by template URI."""
        return self._by_uri.get(uri)

    def resolve(self, uri: str) -> WidgetDescriptor:
        widget = self.get(uri)
        if widget is None:
            raise WidgetNotFoundError(f"Unknown resource: {uri}")
        return widget

    def for_stage(self, stage: Stage) -> WidgetDescriptor:
        return self._by_name[STAGE_WIDGETS[stage]]
