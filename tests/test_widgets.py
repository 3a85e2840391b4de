"""Tests for the widget registry."""

import pytest
from calcufy.core.models import Stage
from calcufy.utils.config import Settings
from calcufy.widgets.registry import WIDGETS, WidgetNotFoundError, WidgetRegistry


@pytest.fixture
def assets_dir(tmp_path):
    """Create a directory of pre-built widget HTML."""
    for name, _ in WIDGETS:
        (tmp_path / f"{name}.html").write_text(f"<div data-widget='{name}'></div>", encoding="utf-8")
    return tmp_path


def test_remote_registry_markup():
    """Test generated shells point at the asset host."""
    registry = WidgetRegistry.from_remote("https://assets.example/")
    widget = registry.resolve("ui://widget/number-input.html")

    assert widget.name == "number-input"
    assert widget.title == "Number Input"
    assert 'src="https://assets.example/assets/number-input.js"' in widget.html
    assert 'href="https://assets.example/assets/number-input.css"' in widget.html
    selector = registry.resolve("ui://widget/operation-selector.html")
    assert '<script type="module" src="https://assets.example/assets/operation-selector.js"></script>' in selector.html
    assert len(registry) == 3


def test_local_registry_reads_files(assets_dir):
    """Test pre-built HTML is loaded from disk."""
    registry = WidgetRegistry.from_directory(assets_dir)
    widget = registry.resolve("ui://widget/result-display.html")
    assert widget.html == "<div data-widget='result-display'></div>"


def test_local_registry_missing_file(assets_dir):
    """Test start-up fails when a widget was not built."""
    (assets_dir / "number-input.html").unlink()
    with pytest.raises(WidgetNotFoundError):
        WidgetRegistry.from_directory(assets_dir)


def test_lookup_is_exact():
    """Test URI lookups do not normalise."""
    registry = WidgetRegistry.from_remote("https://assets.example")
    assert registry.get("ui://widget/operation-selector.html") is not None
    assert registry.get("ui://widget/operation-selector") is None
    assert registry.get("UI://widget/operation-selector.html") is None
    with pytest.raises(WidgetNotFoundError):
        registry.resolve("ui://widget/unknown.html")


def test_for_stage():
    """Test each stage maps to its widget."""
    registry = WidgetRegistry.from_remote("https://assets.example")
    assert registry.for_stage(Stage.AWAITING_OPERATION).name == "operation-selector"
    assert registry.for_stage(Stage.AWAITING_OPERANDS).name == "number-input"
    assert registry.for_stage(Stage.COMPLETED).name == "result-display"


def test_from_settings(assets_dir):
    """Test the configured asset source is honoured."""
    remote = WidgetRegistry.from_settings(Settings(widget_source="remote", base_url="https://cdn.example"))
    assert "https://cdn.example/assets/" in remote.resolve("ui://widget/number-input.html").html

    local = WidgetRegistry.from_settings(Settings(widget_source="local", assets_dir=str(assets_dir)))
    assert local.resolve("ui://widget/number-input.html").html == "<div data-widget='number-input'></div>"
