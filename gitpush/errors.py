class GitPushError(Exception):
    pass


class SubprocessFailure(GitPushError):
    """A git/gh invocation exited non-zero or could not be started."""

    def __init__(self, command, returncode=None, output=""):
        self.command = list(command)
        self.returncode = returncode
        self.output = output or ""
        detail = self.output.strip() or f"exit code {returncode}"
        super().__init__(f"{' '.join(self.command)} failed: {detail}")


class ConfigMissing(GitPushError):
    pass


class AiError(GitPushError):
    pass


class InvalidCredentials(AiError):
    pass


class RateLimited(AiError):
    pass


class ProviderError(AiError):
    pass


class EmptyResponse(AiError):
    pass


class PromptCancelled(GitPushError):
    pass
