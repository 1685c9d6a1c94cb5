"""Tests for the git hook installer."""

from pathlib import Path

from repoguard.hooks.installer import HOOK_MARKER, install_hooks, uninstall_hooks


def _repo(tmp_path: Path) -> Path:
    (tmp_path / ".git").mkdir()
    return tmp_path


class TestInstall:
    def test_installs_both_hooks(self, tmp_path):
        repo = _repo(tmp_path)
        ok, _ = install_hooks(repo)
        assert ok is True
        pre_commit = (repo / ".git" / "hooks" / "pre-commit").read_text()
        pre_push = (repo / ".git" / "hooks" / "pre-push").read_text()
        assert HOOK_MARKER in pre_commit and "repoguard scan" in pre_commit
        assert "repoguard branch" in pre_push

    def test_reinstall_is_idempotent(self, tmp_path):
        repo = _repo(tmp_path)
        install_hooks(repo)
        ok, _ = install_hooks(repo)
        assert ok is True

    def test_refuses_foreign_hook(self, tmp_path):
        repo = _repo(tmp_path)
        hooks = repo / ".git" / "hooks"
        hooks.mkdir()
        (hooks / "pre-push").write_text("#!/bin/sh\necho mine\n")
        ok, messages = install_hooks(repo)
        assert ok is False
        assert any("--force" in text for _, text in messages)
        assert [flag for flag, _ in messages] == [True, False]
        assert (hooks / "pre-push").read_text() == "#!/bin/sh\necho mine\n"
        assert (hooks / "pre-commit").exists()

    def test_not_a_repo(self, tmp_path):
        ok, _ = install_hooks(tmp_path)
        assert ok is False


class TestUninstall:
    def test_removes_own_hooks_only(self, tmp_path):
        repo = _repo(tmp_path)
        install_hooks(repo)
        hooks = repo / ".git" / "hooks"
        (hooks / "pre-push").write_text("#!/bin/sh\necho mine\n")
        ok, _ = uninstall_hooks(repo)
        assert ok is False
        assert not (hooks / "pre-commit").exists()
        assert (hooks / "pre-push").exists()

    def test_nothing_installed(self, tmp_path):
        ok, messages = uninstall_hooks(_repo(tmp_path))
        assert ok is True
        assert messages == [(True, "No repoguard hooks found, nothing to remove.")]
