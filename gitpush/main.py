import sys
import logging
import argparse

from typing import Optional

from gitpush import __version__, ai, prompt
from gitpush.config import ConfigStore
from gitpush.errors import AiError, ConfigMissing, GitPushError, SubprocessFailure
from gitpush.git import GitClient, install_command, parse_repo_name

logger = logging.getLogger("gitpush")

DELETE_SCOPE = 'delete_repo'


class GitPushCLI:
    def __init__(self, store: Optional[ConfigStore] = None, git: Optional[GitClient] = None):
        self.store = store or ConfigStore()
        self.git = git or GitClient()

    # remediation steps

    def ensure_gh_installed(self) -> bool:
        if self.git.is_gh_installed():
            print("✅ GitHub CLI is installed.")
            return True

        print("\n❌ GitHub CLI (gh) is not installed.")
        command = install_command()
        if not command:
            print("Please install it from: https://cli.github.com/")
            return False

        if not prompt.confirm(f"Install it now with '{' '.join(command)}'?"):
            print("Please install it from: https://cli.github.com/")
            return False

        try:
            self.git.install_gh()
        except SubprocessFailure as e:
            print(f"❌ Installation failed: {e}")
            return False

        if not self.git.is_gh_installed():
            print("❌ GitHub CLI is still not available. Open a new terminal and try again.")
            return False
        print("✅ GitHub CLI installed.")
        return True

    def ensure_gh_authenticated(self) -> Optional[bool]:
        """Returns True after a fresh login, False if already logged in, None on failure."""
        if self.git.is_gh_authenticated():
            print("✅ Authenticated with GitHub.")
            return False

        print("⚠️  Not authenticated with GitHub. Starting login...\n")
        try:
            self.git.login_gh()
        except SubprocessFailure as e:
            print(f"❌ GitHub login failed: {e}")
            return None

        if not self.git.is_gh_authenticated():
            print("❌ GitHub authentication did not complete.")
            return None
        print("✅ Authenticated with GitHub.")
        return True

    def configure_ai(self) -> bool:
        current = self.store.get_ai_provider()
        if current:
            print(f"\nCurrent AI provider: {current}")

        provider = prompt.select_ai_provider()
        print(f"\n✅ Selected: {provider}")

        api_key = prompt.input_api_key(provider)
        if not api_key:
            return False

        self.store.set_api_key(provider, api_key)
        print(f"🔧 Configuration saved to: {self.store.config_path}")
        return True

    # commands

    def setup(self) -> bool:
        print("\n🚀 Welcome to gitpush setup!\n")
        try:
            print("Step 1: Checking GitHub CLI installation...")
            if not self.ensure_gh_installed():
                return False

            print("\nStep 2: Checking GitHub authentication...")
            if self.ensure_gh_authenticated() is None:
                return False

            print("\nStep 3: Configure AI provider for commit messages...")
            if not self.configure_ai():
                return False
        except GitPushError as e:
            print(f"\n❌ Error: {e}")
            return False

        print("\n✅ Setup complete!\n")
        print("You can now use:")
        print("  gitpush push    - Stage, commit with AI, and push to GitHub\n")
        return True

    def config(self) -> bool:
        try:
            if not self.configure_ai():
                return False
        except GitPushError as e:
            print(f"\n❌ Error: {e}")
            return False
        print("\n✅ Configuration updated!")
        return True

    def push(self, message: Optional[str] = None, private: bool = False) -> bool:
        print("\n🚀 Starting push...\n")
        try:
            if not self.ensure_gh_installed():
                return False

            fresh_login = self.ensure_gh_authenticated()
            if fresh_login is None:
                return False

            if not message and (fresh_login or not self.store.is_setup_complete()):
                print("\n⚠️  AI provider not configured.")
                if not self.configure_ai():
                    return False

            print("Checking git repository...")
            if not self.git.is_git_repo():
                print("ℹ️  Not a git repository. Initializing...")
                self.git.init_repo()
            print("✅ Git repository exists.")

            print("Checking GitHub remote...")
            if not self.git.has_remote():
                print("ℹ️  No remote found. Creating GitHub repository...")
                name = self.git.create_github_repo(private=private)
                print(f"🆕 GitHub repository \"{name}\" created.")
            print("✅ GitHub remote exists.")

            print("Checking for changes...")
            if not self.git.has_changes():
                print("\nℹ️  No changes to commit.\n")
                return True

            self.git.stage_all()
            print("✅ All changes staged.")

            if not self.git.has_staged_changes():
                print("\nℹ️  No staged changes to commit.\n")
                return True

            if message:
                commit_message = message
                print("Using provided commit message.")
            else:
                diff = self.git.get_staged_diff()
                if not diff.strip():
                    print("\nℹ️  No staged changes to commit.\n")
                    return True
                commit_message = self.generate_message(diff)
                if commit_message is None:
                    return False
                print(f"\n📝 Commit message:\n{commit_message}\n")

            self.git.commit(commit_message)
            print("✅ Changes committed.")

            branch = self.git.push()
            print(f"🚀 Pushed to origin/{branch}")
        except GitPushError as e:
            print(f"\n❌ Error: {e}")
            return False

        print("\n✅ Push complete!\n")
        return True

    def generate_message(self, diff: str) -> Optional[str]:
        for attempt in range(2):
            provider = self.store.get_ai_provider()
            api_key = self.store.get_api_key()
            if not provider or not api_key:
                raise ConfigMissing("Configuration missing. Please run: gitpush setup")

            print("🤖 Generating commit message with AI...")
            try:
                return ai.generate_commit_message(diff, provider, api_key)
            except AiError as e:
                print(f"\n❌ {e}")
                if attempt:
                    return None

            if not prompt.confirm("Reconfigure AI provider and retry?"):
                return None
            if not self.configure_ai():
                return None
        return None

    def delete_github_repo(self, name: str) -> bool:
        try:
            self.git.delete_repo(name)
        except SubprocessFailure as e:
            if DELETE_SCOPE not in e.output:
                print(f"❌ Failed to delete repository: {e.output.strip() or e}")
                return False
            print(f"⚠️  Missing '{DELETE_SCOPE}' permission. Requesting it from GitHub...")
            try:
                self.git.refresh_scope(DELETE_SCOPE)
                self.git.delete_repo(name)
            except SubprocessFailure as retry_error:
                print(f"❌ Failed to delete repository: {retry_error.output.strip() or retry_error}")
                return False
        print(f"🗑️  Deleted repository: {name}")
        return True

    def repos(self, limit: int = 30, delete: Optional[str] = None) -> bool:
        try:
            if delete:
                if not prompt.confirm(f"Permanently delete GitHub repository '{delete}'?"):
                    print("❌ Deletion cancelled")
                    return False
                return self.delete_github_repo(delete)

            print(f"📁 Your repositories (up to {limit}):\n")
            self.git.list_repos(limit)
        except GitPushError as e:
            print(f"\n❌ Error: {e}")
            return False
        return True

    def delete(self, yes: bool = False) -> bool:
        try:
            url = self.git.get_remote_url()
            if not url:
                print("❌ No remote origin set for this directory.")
                return False

            name = parse_repo_name(url)
            if not name:
                print(f"❌ Remote origin is not a GitHub repository: {url}")
                return False

            if not yes and not prompt.confirm(f"Permanently delete GitHub repository '{name}'?"):
                print("❌ Deletion cancelled")
                return False

            if not self.delete_github_repo(name):
                return False

            self.git.remove_remote()
            print("🔗 Removed remote origin")
        except GitPushError as e:
            print(f"\n❌ Error: {e}")
            return False
        return True

    def logout(self, include_gh: bool = False) -> bool:
        if self.store.clear_config():
            print(f"🗑️  Removed configuration: {self.store.config_path}")
        else:
            print("ℹ️  Nothing to clear.")

        if include_gh:
            if not self.git.is_gh_authenticated():
                print("ℹ️  Not logged in to GitHub CLI.")
                return True
            try:
                self.git.logout_gh()
            except SubprocessFailure as e:
                print(f"❌ GitHub logout failed: {e}")
                return False
            print("✅ Logged out of GitHub CLI.")
        return True

    def status(self) -> bool:
        print("\n📊 Status:")
        if not self.git.is_gh_installed():
            print("🐙 GitHub CLI: Not installed")
        elif self.git.is_gh_authenticated():
            print("🐙 GitHub CLI: Authenticated")
        else:
            print("🐙 GitHub CLI: Not authenticated")

        if self.store.is_setup_complete():
            print(f"🤖 AI provider: {self.store.get_ai_provider()}")
        else:
            print("🤖 AI provider: Not configured (run 'gitpush setup')")

        if not self.git.is_git_repo():
            print("📁 Not in a git repository")
            return True

        if self.git.has_changes():
            print("📝 Git: Uncommitted changes")
        else:
            print("✅ Git: Working directory clean")

        url = self.git.get_remote_url()
        if url:
            print(f"🔗 Remote origin: {url}")
        else:
            print("🔗 No remote origin set")
        return True

    def hello(self) -> bool:
        print("👋 Hello from gitpush!")
        return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gitpush',
        description='Git automation CLI with AI-powered commit messages.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gitpush setup
  gitpush push
  gitpush push -m "fix: typo in README"
  gitpush repos --limit 10
  gitpush repos --delete old-experiment
  gitpush delete --yes
  gitpush logout --all
        """
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show debug output')
    subparsers = parser.add_subparsers(dest='command', help='Available commands', required=True)

    subparsers.add_parser('setup', help='First-time setup: GitHub CLI check, login, and API key configuration')
    subparsers.add_parser('config', help='Change AI provider or API key')

    push_parser = subparsers.add_parser('push', help='Stage all changes, generate AI commit message, and push to GitHub')
    push_parser.add_argument('-m', '--message', help='Use a custom commit message instead of AI')
    push_parser.add_argument('--private', action='store_true', help='Create a private repository if none exists')

    repos_parser = subparsers.add_parser('repos', help='List your GitHub repositories')
    repos_parser.add_argument('-n', '--limit', type=int, default=30, help='Number of repositories to show (default: 30)')
    repos_parser.add_argument('-d', '--delete', metavar='NAME', help='Delete the named repository')

    delete_parser = subparsers.add_parser('delete', help="Delete this directory's GitHub repository")
    delete_parser.add_argument('-y', '--yes', action='store_true', help='Skip the confirmation prompt')

    logout_parser = subparsers.add_parser('logout', help='Remove stored AI configuration')
    logout_parser.add_argument('-a', '--all', action='store_true', help='Also log out of the GitHub CLI')

    subparsers.add_parser('status', help='Show authentication, AI and repository status')
    subparsers.add_parser('hello', help='Say hello')
    return parser


def run_command(cli: GitPushCLI, args: argparse.Namespace) -> bool:
    if args.command == 'setup':
        return cli.setup()
    elif args.command == 'config':
        return cli.config()
    elif args.command == 'push':
        return cli.push(message=args.message, private=args.private)
    elif args.command == 'repos':
        return cli.repos(limit=args.limit, delete=args.delete)
    elif args.command == 'delete':
        return cli.delete(yes=args.yes)
    elif args.command == 'logout':
        return cli.logout(include_gh=args.all)
    elif args.command == 'status':
        return cli.status()
    elif args.command == 'hello':
        return cli.hello()
    return False


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    logger.debug("Running command: %s", args.command)
    cli = GitPushCLI()
    try:
        ok = run_command(cli, args)
    except (KeyboardInterrupt, EOFError):
        print("\n❌ Cancelled")
        sys.exit(1)

    if not ok:
        sys.exit(1)


if __name__ == '__main__':
    main()
