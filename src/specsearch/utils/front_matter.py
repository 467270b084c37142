"""YAML front matter for spec files.

A spec file starts with a YAML mapping fenced by ``---`` lines, followed by
the markdown body::

    ---
    id: 12
    title: Stripe Payment Integration
    category: payments
    tags: [stripe, billing]
    ---
    # Stripe Payment Integration

    Customers are billed monthly...
"""

import re
from typing import Any

import yaml


DELIMITER = "---"

_FRONT_MATTER_PATTERN = re.compile(
    rf"^{re.escape(DELIMITER)}[ \t]*\r?\n(?:(.*?)\r?\n)??{re.escape(DELIMITER)}[ \t]*(?:\r?\n|$)",
    re.DOTALL,
)


class FrontMatterError(ValueError):
    """Raised when a spec's front matter is missing or malformed."""


def parse_front_matter(content: str) -> tuple[dict[str, Any], str]:
    """Lenient split of ``content`` into (metadata, body).

    Content without a usable front matter block comes back unchanged with
    empty metadata.

        >>> parse_front_matter("---\\ntitle: Hello\\n---\\n# Content")
        ({'title': 'Hello'}, '# Content')
    """
    try:
        return load_front_matter(content)
    except FrontMatterError:
        return {}, content


def load_front_matter(content: str) -> tuple[dict[str, Any], str]:
    """Split ``content`` into (metadata, stripped body), raising on bad input.

    Raises:
        FrontMatterError: no fenced block, invalid YAML, or YAML that is not
            a mapping.
    """
    match = _FRONT_MATTER_PATTERN.match(content)
    if match is None:
        raise FrontMatterError("Content does not have front matter")

    try:
        metadata = yaml.safe_load(match.group(1) or "")
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"Invalid front matter YAML: {exc}") from exc
    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise FrontMatterError("Front matter must be a mapping")

    return metadata, content[match.end() :].strip()


def serialize_front_matter(metadata: dict[str, Any], markdown_content: str) -> str:
    """Render a spec file; keys are sorted and empty metadata adds no fence."""
    if not metadata:
        return markdown_content
    yaml_text = yaml.safe_dump(metadata, default_flow_style=False, allow_unicode=True, sort_keys=True)
    return f"{DELIMITER}\n{yaml_text.rstrip()}\n{DELIMITER}\n{markdown_content}"
