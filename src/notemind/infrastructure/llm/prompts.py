"""Jinja2 templates for system prompts."""

from jinja2 import Environment, PackageLoader, select_autoescape


def create_jinja_env() -> Environment:
    """Create the Jinja2 environment for prompt templates.

    Templates are loaded from the notemind.infrastructure.llm templates
    directory.

    Returns:
        Configured Jinja2 environment.
    """
    return Environment(
        loader=PackageLoader("notemind.infrastructure.llm", "templates"),
        autoescape=select_autoescape(),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_chat_system_prompt(language: str = "English") -> str:
    """Render the chat panel system prompt.

    Args:
        language: Language the assistant should reply in.
    """
    template = create_jinja_env().get_template("chat_system_prompt.j2")
    return template.render(language=language).strip()


def render_reflection_system_prompt(language: str | None = None) -> str:
    """Render the reflection system prompt."""
    template = create_jinja_env().get_template("reflection_system_prompt.j2")
    return template.render(language=language).strip()
