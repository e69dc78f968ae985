"""Tests for action dispatch."""
import json

import pytest

from wpmm.actions import Action, run_action
from wpmm.core.exceptions import UnsupportedActionError
from wpmm.package import PackageConfig, WordPressSection


def in_place_config(language="en_US"):
    return PackageConfig(name="ignored", wordpress=WordPressSection(language=language))


def test_dump_in_place(wp_site):
    output = run_action(Action.DUMP, wp_site, config=in_place_config("nl_NL"))

    assert output == wp_site / "wp-package.json"
    assert json.loads(output.read_text())["wordpress"]["language"] == "nl_NL"


def test_init_in_place(wp_site):
    output = run_action("init", wp_site, config=in_place_config())
    assert json.loads(output.read_text())["wordpress"]["version"] == "6.4.3"


def test_info(wp_site):
    info = run_action(Action.INFO, wp_site, config=in_place_config())
    assert info["wordpress"] == {"version": "6.4.3", "locale": "it_IT"}
    assert info["base_folder"] == str(wp_site)


def test_info_loads_package_file(wp_site):
    (wp_site / "wp-package.json").write_text(json.dumps({"name": "from-file"}))
    assert run_action(Action.INFO, wp_site)["name"] == "from-file"


@pytest.mark.parametrize("action", [Action.UPLOAD_DATABASE, Action.DUMP_DATABASE])
def test_database_actions_are_external(wp_site, action):
    with pytest.raises(UnsupportedActionError):
        run_action(action, wp_site, config=in_place_config())


def test_unknown_action(wp_site):
    with pytest.raises(ValueError):
        run_action("deploy", wp_site, config=in_place_config())


def test_every_action_has_a_handler():
    from wpmm.actions import HANDLERS
    assert set(HANDLERS) == set(Action)
