"""
Tests for banner sources.
"""
from __future__ import annotations

import importlib.util
import platform
import sys

import pytest

from core.banners import (
    CustomBanner,
    DefaultBanner,
    ResourceBanner,
    STRAP_MARKER,
    select_banner,
)
from core.environment import Environment
from core.errors import ResourceUnavailableError
from core.protocols import BannerSource


@pytest.fixture
def app_class(tmp_path, monkeypatch):
    """A class defined in a module living in tmp_path/myapp/."""
    package_dir = tmp_path / "myapp"
    package_dir.mkdir()
    module_path = package_dir / "service.py"
    module_path.write_text("class InventoryApp:\n    pass\n")

    spec = importlib.util.spec_from_file_location("myapp_service", module_path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    monkeypatch.setitem(sys.modules, "myapp_service", module)
    return module.InventoryApp


class TestDefaultBanner:
    """Tests for the built-in banner."""

    def test_contains_marker(self, environment):
        assert ":: App ::" in DefaultBanner().produce(environment, None)

    def test_contains_app_version(self, environment):
        text = DefaultBanner().produce(environment, None)
        assert "(v1.2.3)" in text

    def test_strap_line_padded(self, environment):
        """Version is right-aligned on the strap line."""
        text = DefaultBanner().produce(environment, None)
        strap = [line for line in text.splitlines() if line.startswith(STRAP_MARKER)][0]
        assert len(strap) == 42
        assert strap.endswith(" (v1.2.3)")

    def test_accepts_plain_mapping(self):
        text = DefaultBanner().produce({"app.version": "9.9"}, None)
        assert "(v9.9)" in text

    def test_is_banner_source(self):
        assert isinstance(DefaultBanner(), BannerSource)


class TestCustomBanner:
    """Tests for fixed custom text."""

    def test_returns_text_unchanged(self, environment):
        assert CustomBanner("My Banner ${app.name}").produce(environment, None) == "My Banner ${app.name}"

    def test_empty_text_allowed(self, environment):
        assert CustomBanner("").produce(environment, None) == ""

    def test_is_banner_source(self):
        assert isinstance(CustomBanner("x"), BannerSource)


class TestResourceBanner:
    """Tests for file-based banners."""

    def test_absolute_path(self, tmp_path, environment):
        path = tmp_path / "banner.txt"
        path.write_text("Welcome to ${app.name}${app.formatted-version}")
        text = ResourceBanner(str(path)).produce(environment, None)
        assert text == "Welcome to Inventory (v1.2.3)"

    def test_relative_to_source_class(self, app_class, tmp_path, environment):
        (tmp_path / "myapp" / "banner.txt").write_text("next to the code")
        banner = ResourceBanner("banner.txt")
        assert banner.exists(app_class)
        assert banner.produce(environment, app_class) == "next to the code"

    def test_relative_to_cwd(self, environment):
        """The isolated fixture runs each test from an empty work dir."""
        with open("banner.txt", "w") as f:
            f.write("from cwd")
        assert ResourceBanner("banner.txt").produce(environment, None) == "from cwd"

    def test_source_class_dir_wins_over_cwd(self, app_class, tmp_path, environment):
        (tmp_path / "myapp" / "banner.txt").write_text("module dir")
        with open("banner.txt", "w") as f:
            f.write("cwd")
        assert ResourceBanner("banner.txt").produce(environment, app_class) == "module dir"

    def test_title_defaults_to_class_name(self, app_class, tmp_path):
        (tmp_path / "myapp" / "banner.txt").write_text("${app.title}")
        env = Environment({})
        assert ResourceBanner("banner.txt").produce(env, app_class) == "InventoryApp"

    def test_python_version_placeholder(self, tmp_path, environment):
        path = tmp_path / "banner.txt"
        path.write_text("Python ${python.version}")
        text = ResourceBanner(path).produce(environment, None)
        assert text == f"Python {platform.python_version()}"

    def test_config_placeholders(self, tmp_path, environment):
        path = tmp_path / "banner.txt"
        path.write_text("mode=${banner.mode} missing=${no.such.key}")
        text = ResourceBanner(path).produce(environment, None)
        assert text == "mode=console missing=${no.such.key}"

    def test_charset(self, tmp_path, environment):
        path = tmp_path / "banner.txt"
        path.write_bytes("caf\xe9".encode("latin-1"))
        assert ResourceBanner(path, charset="latin-1").produce(environment, None) == "caf\xe9"

    def test_missing_raises_resource_unavailable(self, environment):
        banner = ResourceBanner("does-not-exist.txt")
        assert not banner.exists(None)
        with pytest.raises(ResourceUnavailableError, match="does-not-exist.txt"):
            banner.produce(environment, None)

    def test_undecodable_raises_resource_unavailable(self, tmp_path, environment):
        path = tmp_path / "banner.txt"
        path.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(ResourceUnavailableError, match="could not be read"):
            ResourceBanner(path, charset="utf-8").produce(environment, None)

    def test_builtin_source_class_ignored(self, environment):
        """Classes without a source file only use the cwd."""
        assert ResourceBanner("banner.txt").candidates(int)[-1].name == "banner.txt"
        assert len(ResourceBanner("banner.txt").candidates(int)) == 1


class TestSelectBanner:
    """Tests for choosing the banner source."""

    def test_custom_wins(self, environment):
        custom = CustomBanner("mine")
        assert select_banner(custom, environment) is custom

    def test_resource_when_present(self, environment):
        with open("banner.txt", "w") as f:
            f.write("resource")
        chosen = select_banner(None, environment)
        assert isinstance(chosen, ResourceBanner)

    def test_configured_location(self, tmp_path):
        path = tmp_path / "art.txt"
        path.write_text("art")
        env = Environment({"banner.location": str(path), "banner.charset": "utf-8"})
        chosen = select_banner(None, env)
        assert isinstance(chosen, ResourceBanner)
        assert chosen.location == str(path)

    def test_default_when_no_resource(self, environment):
        assert isinstance(select_banner(None, environment), DefaultBanner)
