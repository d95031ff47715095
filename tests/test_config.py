# tests/test_config.py
from __future__ import annotations

import pytest

from bigint import APPLY, CFG, UserInputError, config, runtime
from bigint.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir

# ---------- workspace ---------------------------------------------------------


def test_workspace_follows_env(workspace):
    assert workspace_dir() == workspace.resolve()


def test_seeding_copies_packaged_profiles_once(workspace):
    root, seeded, copied = ensure_workspace_seeded()
    assert seeded
    assert copied["profiles"] == 2
    assert (root / "profiles" / "default.toml").is_file()

    _, seeded, copied = ensure_workspace_seeded()
    assert not seeded
    assert copied["profiles"] == 0


def test_seed_overwrite_restores_profiles(workspace):
    ensure_workspace_seeded()
    target = workspace / "profiles" / "default.toml"
    target.write_text("[BEHAVIOUR]\nMAX_DIGITS = 3\n", encoding="utf-8")

    _, copied = seed_workspace(overwrite=True)
    assert copied["profiles"] == 2
    assert "100000" in target.read_text(encoding="utf-8")


# ---------- profiles ----------------------------------------------------------


def test_load_default_profile(workspace):
    ensure_workspace_seeded()
    s = config.load_settings("default")
    assert s.name == "default"
    assert "PROFILE" not in s.data
    assert s.data["BEHAVIOUR"]["MAX_DIGITS"] == 100000
    assert s._source == workspace.resolve() / "profiles" / "default.toml"


def test_load_settings_without_name_uses_default(workspace):
    ensure_workspace_seeded()
    assert config.load_settings(None).name == "default"


def test_profile_without_metadata_uses_file_name(workspace):
    ensure_workspace_seeded()
    (workspace / "profiles" / "tiny.toml").write_text("[BEHAVIOUR]\nMAX_DIGITS = 10\n", encoding="utf-8")
    s = config.load_settings("tiny")
    assert s.name == "tiny"
    assert s.description == "(no description)"


def test_missing_profile(workspace):
    ensure_workspace_seeded()
    assert not config.has_profile("nope")
    with pytest.raises(UserInputError, match="not found"):
        config.load_settings("nope")


def test_malformed_toml_reports_location(workspace):
    ensure_workspace_seeded()
    (workspace / "profiles" / "broken.toml").write_text("[BEHAVIOUR\nMAX_DIGITS = 1\n", encoding="utf-8")
    with pytest.raises(UserInputError, match="broken.toml"):
        config.load_settings("broken")


@pytest.mark.parametrize("bad", ["0", "-4", "\"many\"", "true"])
def test_bad_digit_limit(workspace, bad):
    ensure_workspace_seeded()
    (workspace / "profiles" / "bad.toml").write_text(f"[BEHAVIOUR]\nMAX_DIGITS = {bad}\n", encoding="utf-8")
    with pytest.raises(UserInputError, match="MAX_DIGITS"):
        config.load_settings("bad")


def test_list_profiles(workspace):
    ensure_workspace_seeded()
    assert config.list_all_profiles() == ["default", "readable"]
    items = dict(config.list_profiles_with_descriptions())
    assert items["readable"] == "Grouped digits, long values abbreviated"


def test_current_profile_roundtrip(workspace):
    assert config.read_current_profile() is None
    config.write_current_profile("readable.toml")
    assert config.read_current_profile() == "readable"


# ---------- runtime -----------------------------------------------------------


def test_cfg_dotted_lookup():
    APPLY({"FORMATTING": {"ELLIPSIS": "~"}, "TOP": 1})
    assert CFG("FORMATTING.ELLIPSIS") == "~"
    assert CFG("TOP") == 1
    assert CFG("FORMATTING.MISSING", "x") == "x"
    assert CFG("NOPE.DEEPER", 5) == 5
    assert CFG("", 7) == 7


def test_apply_settings_object_and_debug_flag(workspace):
    ensure_workspace_seeded()
    (workspace / "profiles" / "loud.toml").write_text(
        "[PROFILE]\nname = \"loud\"\n[BEHAVIOUR]\nDEBUG = true\n", encoding="utf-8"
    )
    APPLY(config.load_settings("loud"))
    rt = runtime.current()
    assert rt.profile_name == "loud"
    assert rt.debug is True


def test_apply_plain_dict_replaces_profile(workspace):
    ensure_workspace_seeded()
    APPLY(config.load_settings("readable"))
    assert runtime.current().profile_name == "readable"
    APPLY({"FORMATTING": {"GROUP_DIGITS": False}})
    assert runtime.current().profile_name == "default"
    assert CFG("FORMATTING.GROUP_DIGITS") is False
    assert CFG("FORMATTING.NUM_ABBR_HEAD") is None


def test_reset_restores_defaults():
    APPLY({"BEHAVIOUR": {"DEBUG": True}})
    rt = runtime.reset()
    assert rt.debug is False
    assert rt.settings == {}
