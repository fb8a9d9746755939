# =============================================================================
# core/validation.py - Application Metadata Validation
# =============================================================================
# Business rules for the `meta` block of a project application.
#
# validate_meta() never raises and performs no I/O: it returns every
# violation it finds, in a fixed order that clients rely on when rendering
# error lists:
#   1. project_name   2. author_name   3. author_link   4. brief
#   5. links present  6. each link url (in link order)   7. default count
# =============================================================================

from core.models.application import ApplicationMetadata, ProjectLink

MAX_BRIEF_LENGTH = 20

URL_SCHEMES = ("http://", "https://")


def is_blank(value: str) -> bool:
    return not value.strip()


def is_http_url(value: str) -> bool:
    """Check that a value starts with http:// or https://."""
    return value.startswith(URL_SCHEMES)


def _validate_link(position: int, link: ProjectLink) -> list[str]:
    if is_blank(link.url):
        return [f"link {position}: url must not be empty"]
    if not is_http_url(link.url):
        return [f"link {position}: url must be a valid URL starting with http:// or https://"]
    return []


def count_default_links(links: list[ProjectLink]) -> int:
    """Count links explicitly marked as default. Absent flags do not count."""
    return sum(1 for link in links if link.is_default is True)


def validate_meta(meta: ApplicationMetadata) -> tuple[str, ...]:
    """
    Validate application metadata.

    Args:
        meta: Decoded metadata block

    Returns:
        Tuple of human-readable error messages. Empty means valid.

    Example:
        >>> validate_meta(ApplicationMetadata(project_name="Demo"))[0]
        'author_name must not be empty'
    """
    errors: list[str] = []

    if is_blank(meta.project_name):
        errors.append("project_name must not be empty")

    if is_blank(meta.author_name):
        errors.append("author_name must not be empty")

    if is_blank(meta.author_link):
        errors.append("author_link must not be empty")
    elif not is_http_url(meta.author_link):
        errors.append("author_link must be a valid URL starting with http:// or https://")

    # len() counts code points, so CJK text is measured the same as Latin
    if is_blank(meta.brief):
        errors.append("brief must not be empty")
    elif len(meta.brief) > MAX_BRIEF_LENGTH:
        errors.append(f"brief must not exceed {MAX_BRIEF_LENGTH} characters")

    if not meta.links:
        errors.append("at least one project link is required")
        return tuple(errors)

    for position, link in enumerate(meta.links, start=1):
        errors.extend(_validate_link(position, link))

    if count_default_links(meta.links) != 1:
        errors.append("exactly one link must be marked as default")

    return tuple(errors)
