from getpass import getpass
from typing import Optional

from gitpush import ai
from gitpush.errors import PromptCancelled

MAX_KEY_ATTEMPTS = 3
MAX_CHOICE_ATTEMPTS = 5

PROVIDER_CHOICES = [
    ('gemini', 'Gemini (Google)', 'Use Google Gemini API'),
    ('openai', 'OpenAI (GPT)', 'Use OpenAI GPT API'),
    ('anthropic', 'Anthropic (Claude)', 'Use Anthropic Claude API'),
    ('github', 'GitHub PAT', 'Use GitHub Personal Access Token'),
]


def select_ai_provider() -> str:
    print("\n🤖 Select an AI provider for generating commit messages:\n")
    for index, (_, name, description) in enumerate(PROVIDER_CHOICES, start=1):
        print(f"{index}. {name} - {description}")

    for _ in range(MAX_CHOICE_ATTEMPTS):
        choice = input(f"Enter choice (1-{len(PROVIDER_CHOICES)}): ").strip()
        if choice.isdigit() and 1 <= int(choice) <= len(PROVIDER_CHOICES):
            return PROVIDER_CHOICES[int(choice) - 1][0]
        print("❌ Invalid choice")

    raise PromptCancelled("No AI provider selected")


def input_api_key(provider: str, validate=ai.validate_api_key) -> Optional[str]:
    """Ask for an API key until one validates. Returns None once attempts run out."""
    backend = ai.get_provider(provider)
    print(f"\n🔑 Get your {backend.label} API key from: {backend.key_url}\n")

    for _ in range(MAX_KEY_ATTEMPTS):
        api_key = getpass(f"Enter your {backend.label} API key: ").strip()
        if not api_key:
            print("❌ API key cannot be empty")
            continue

        print("\n🔄 Validating API key...")
        valid, error = validate(provider, api_key)
        if valid:
            print("✅ API key is valid!\n")
            return api_key
        print(f"\n❌ {error or 'Invalid API key'}")
        print("Please try again.\n")

    print(f"❌ No valid API key after {MAX_KEY_ATTEMPTS} attempts")
    return None


def confirm(message: str, default: bool = False) -> bool:
    hint = 'Y/n' if default else 'y/N'
    for _ in range(MAX_CHOICE_ATTEMPTS):
        answer = input(f"{message} ({hint}): ").strip().lower()
        if not answer:
            return default
        if answer in ('y', 'yes'):
            return True
        if answer in ('n', 'no'):
            return False
        print("Please answer 'y' or 'n'.")
    return default
