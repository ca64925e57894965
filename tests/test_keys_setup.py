import stat
from pathlib import Path
from typing import Optional

import pytest

from letsyolo.constants import PROFILE_MARKER
from letsyolo.errors import FilesystemError
from letsyolo.keys.profiles import ShellProfileHook
from letsyolo.keys.scanner import SecretScanner
from letsyolo.keys.setup import SecretSetup, describe_suggestion
from letsyolo.keys.store import SecretStore
from letsyolo.models import ApiKeyDefinition, SecretRecord, SecretSource
from letsyolo.settings import RuntimeContext


class ScriptedAnswers:
    def __init__(
        self, answers: Optional[dict[str, str]] = None, accept: bool = False
    ) -> None:
        self.answers = answers or {}
        self.accept = accept
        self.prompted: dict[str, Optional[SecretRecord]] = {}
        self.confirmed: list[str] = []

    def prompt(self, key_def: ApiKeyDefinition, record: Optional[SecretRecord]) -> str:
        self.prompted[key_def.env_var] = record
        return self.answers.get(key_def.env_var, "")

    def confirm(self, key_def: ApiKeyDefinition, record: SecretRecord) -> bool:
        self.confirmed.append(key_def.env_var)
        return self.accept


def _setup(context: RuntimeContext, script: ScriptedAnswers) -> SecretSetup:
    store = SecretStore(context)
    return SecretSetup(
        store=store,
        scanner=SecretScanner(context, store),
        prompt=script.prompt,
        confirm=script.confirm,
    )


# --- SecretSetup ---


def test_typed_values_are_saved(context: RuntimeContext) -> None:
    script = ScriptedAnswers({"ANTHROPIC_API_KEY": "  sk-ant-typed  "})

    result = _setup(context, script).run()

    assert result.saved == ["ANTHROPIC_API_KEY"]
    assert result.skipped == ["OPENAI_API_KEY", "GITHUB_TOKEN", "SRC_ACCESS_TOKEN"]
    assert SecretStore(context).read() == {"ANTHROPIC_API_KEY": "sk-ant-typed"}


def test_nothing_is_written_when_everything_is_skipped(context: RuntimeContext) -> None:
    result = _setup(context, ScriptedAnswers()).run()

    assert result.saved == []
    assert not context.secrets_file.exists()


def test_existing_secrets_are_kept_on_empty_answer(context: RuntimeContext) -> None:
    SecretStore(context).write({"OPENAI_API_KEY": "sk-file"})
    script = ScriptedAnswers({"GITHUB_TOKEN": "ghp_new"})

    result = _setup(context, script).run()

    assert result.kept == ["OPENAI_API_KEY"]
    assert script.confirmed == []
    assert SecretStore(context).read() == {
        "OPENAI_API_KEY": "sk-file",
        "GITHUB_TOKEN": "ghp_new",
    }


def test_scanned_values_need_confirmation(context: RuntimeContext) -> None:
    (context.home / ".zshrc").write_text(
        "export SRC_ACCESS_TOKEN=sgp_from_zshrc\n", encoding="utf-8"
    )
    script = ScriptedAnswers(accept=False)

    result = _setup(context, script).run()

    assert script.confirmed == ["SRC_ACCESS_TOKEN"]
    assert "SRC_ACCESS_TOKEN" in result.skipped
    assert not context.secrets_file.exists()


def test_confirmed_scanned_values_are_saved(tmp_path: Path) -> None:
    context = RuntimeContext(home=tmp_path, environ={"GITHUB_TOKEN": "ghp_env_value"})
    script = ScriptedAnswers(accept=True)

    result = _setup(context, script).run()

    assert result.saved == ["GITHUB_TOKEN"]
    assert script.prompted["GITHUB_TOKEN"].source == SecretSource.ENVIRONMENT
    assert SecretStore(context).read() == {"GITHUB_TOKEN": "ghp_env_value"}


def test_describe_suggestion_masks_value(tmp_path: Path) -> None:
    record = SecretRecord(
        value="sk-ant-api03-abcdefgh",
        source=SecretSource.SCANNED_FILE,
        path=tmp_path / ".env",
    )

    assert describe_suggestion(record) == f"sk-ant-a...efgh from {tmp_path / '.env'}"
    assert describe_suggestion(None) == ""


# --- ShellProfileHook ---


def test_profiles_for_posix_and_windows(tmp_path: Path) -> None:
    posix = ShellProfileHook(RuntimeContext(home=tmp_path))
    windows = ShellProfileHook(RuntimeContext(home=tmp_path, platform="win32"))

    assert posix.profiles() == [
        tmp_path / ".zshrc",
        tmp_path / ".bashrc",
        tmp_path / ".bash_profile",
    ]
    assert all(item.suffix == ".ps1" for item in windows.profiles())
    assert windows.source_line().startswith(". ")


def test_add_source_line_appends_once(context: RuntimeContext) -> None:
    hook = ShellProfileHook(context)
    profile = context.home / ".zshrc"
    profile.write_text("alias ll='ls -l'\n", encoding="utf-8")
    profile.chmod(0o640)

    assert hook.add_source_line(profile) is True
    assert hook.add_source_line(profile) is False

    content = profile.read_text(encoding="utf-8")
    assert content.startswith("alias ll='ls -l'\n")
    assert content.count(PROFILE_MARKER) == 1
    assert 'source "$HOME/.letsyolo/secrets.env"' in content
    assert stat.S_IMODE(profile.stat().st_mode) == 0o640


def test_add_source_line_recognises_manual_hook(context: RuntimeContext) -> None:
    profile = context.home / ".bashrc"
    profile.write_text(". ~/.letsyolo/secrets.env\n", encoding="utf-8")

    assert ShellProfileHook(context).add_source_line(profile) is False


def test_add_source_line_writes_through_symlinks(context: RuntimeContext) -> None:
    dotfiles = context.home / "dotfiles"
    dotfiles.mkdir()
    real = dotfiles / "zshrc"
    real.write_text("export EDITOR=vim\n", encoding="utf-8")
    link = context.home / ".zshrc"
    link.symlink_to(real)

    ShellProfileHook(context).add_source_line(link)

    assert link.is_symlink()
    assert PROFILE_MARKER in real.read_text(encoding="utf-8")


def test_install_hooks_every_profile(context: RuntimeContext) -> None:
    hooked = ShellProfileHook(context).install()

    assert hooked == [
        context.home / ".zshrc",
        context.home / ".bashrc",
        context.home / ".bash_profile",
    ]
    for profile in hooked:
        assert PROFILE_MARKER in profile.read_text(encoding="utf-8")
        assert stat.S_IMODE(profile.stat().st_mode) == 0o644


def test_install_continues_past_failing_profile(
    context: RuntimeContext, monkeypatch: pytest.MonkeyPatch
) -> None:
    hook = ShellProfileHook(context)
    original = hook.add_source_line

    def flaky(profile: Path) -> bool:
        if profile.name == ".bashrc":
            raise FilesystemError(profile, "read-only file system")
        return original(profile)

    monkeypatch.setattr(hook, "add_source_line", flaky)

    hooked = hook.install()

    assert context.home / ".bashrc" not in hooked
    assert context.home / ".zshrc" in hooked
