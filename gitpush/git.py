import os
import re
import sys

from typing import Optional, List

from gitpush import shell
from gitpush.errors import SubprocessFailure
from gitpush.shell import CAPTURED, INHERITED

DEFAULT_BRANCH = 'main'

_REPO_NAME_RE = re.compile(r'github\.com[:/]([^/\s]+/[^/\s]+?)(?:\.git)?/?$')

INSTALL_COMMANDS = {
    'win32': ['winget', 'install', 'GitHub.cli'],
    'darwin': ['brew', 'install', 'gh'],
    'linux': ['sudo', 'apt', 'install', 'gh'],
}


def parse_repo_name(url: str) -> Optional[str]:
    """Return ``owner/repo`` from an HTTPS or SSH GitHub remote URL."""
    match = _REPO_NAME_RE.search(url.strip())
    return match.group(1) if match else None


def porcelain_has_changes(output: str) -> bool:
    return bool(output.strip())


def branch_or_default(output: str) -> str:
    return output.strip() or DEFAULT_BRANCH


def install_command(platform: Optional[str] = None) -> Optional[List[str]]:
    platform = platform or sys.platform
    for prefix, command in INSTALL_COMMANDS.items():
        if platform.startswith(prefix):
            return list(command)
    return None


class GitClient:
    """git and gh operations, each one a fixed argument vector."""

    def __init__(self, runner=shell.run, cwd: Optional[str] = None):
        self.runner = runner
        self.cwd = cwd

    def _git(self, *args, mode=CAPTURED) -> str:
        return self.runner('git', list(args), mode=mode, cwd=self.cwd)

    def _gh(self, *args, mode=CAPTURED) -> str:
        return self.runner('gh', list(args), mode=mode, cwd=self.cwd)

    def _check(self, binary: str, *args) -> bool:
        return shell.succeeds(binary, list(args), runner=self.runner, cwd=self.cwd)

    # gh

    def is_gh_installed(self) -> bool:
        return self._check('gh', '--version')

    def is_gh_authenticated(self) -> bool:
        return self._check('gh', 'auth', 'status')

    def install_gh(self, platform: Optional[str] = None) -> bool:
        command = install_command(platform)
        if not command:
            return False
        self.runner(command[0], command[1:], mode=INHERITED, cwd=self.cwd)
        return True

    def login_gh(self) -> None:
        self._gh('auth', 'login', mode=INHERITED)

    def logout_gh(self) -> None:
        self._gh('auth', 'logout', mode=INHERITED)

    def refresh_scope(self, scope: str) -> None:
        self._gh('auth', 'refresh', '-h', 'github.com', '-s', scope, mode=INHERITED)

    def create_github_repo(self, private: bool = False) -> str:
        name = os.path.basename(os.path.abspath(self.cwd or os.getcwd()))
        visibility = '--private' if private else '--public'
        self._gh('repo', 'create', name, visibility, '--source=.', '--remote=origin')
        return name

    def list_repos(self, limit: int = 30) -> None:
        self._gh('repo', 'list', '--limit', str(limit), mode=INHERITED)

    def delete_repo(self, name: str) -> None:
        self._gh('repo', 'delete', name, '--yes')

    # git

    def is_git_repo(self) -> bool:
        return self._check('git', 'rev-parse', '--is-inside-work-tree')

    def init_repo(self) -> None:
        self._git('init')

    def has_remote(self) -> bool:
        try:
            output = self._git('remote')
        except SubprocessFailure:
            return False
        return 'origin' in output.split()

    def get_remote_url(self) -> Optional[str]:
        try:
            return self._git('remote', 'get-url', 'origin').strip() or None
        except SubprocessFailure:
            return None

    def remove_remote(self) -> None:
        self._git('remote', 'remove', 'origin')

    def stage_all(self) -> None:
        self._git('add', '.')

    def get_staged_diff(self) -> str:
        return self._git('diff', '--cached')

    def has_staged_changes(self) -> bool:
        return bool(self._git('diff', '--cached', '--name-only').strip())

    def has_changes(self) -> bool:
        try:
            return porcelain_has_changes(self._git('status', '--porcelain'))
        except SubprocessFailure:
            return False

    def commit(self, message: str) -> None:
        self._git('commit', '-m', message)

    def get_current_branch(self) -> str:
        return branch_or_default(self._git('branch', '--show-current'))

    def push(self) -> str:
        branch = self.get_current_branch()
        self._git('push', '-u', 'origin', branch)
        return branch
