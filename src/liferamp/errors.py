"""Exceptions raised at the external-service boundaries."""


class LiferampError(Exception):
    """Base class for liferamp errors."""


class AuthError(LiferampError):
    """The auth provider rejected the credentials or token."""


class AuthNotConfiguredError(AuthError):
    """SUPABASE_URL / SUPABASE_ANON_KEY are not set."""


class LLMError(LiferampError):
    """A chat completion call failed."""


class LLMNotConfiguredError(LLMError):
    """OPENAI_API_KEY is not set."""


class MalformedGameplanError(LiferampError):
    """The LLM returned a gameplan payload that could not be used.

    The message is safe to show to the user.
    """
