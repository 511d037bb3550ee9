"""Parse GitHub example sources into a normalized descriptor.

Accepted inputs:
- ``https://github.com/<owner>/<repo>[/tree/<ref>/<path...>][#<ref>]``
- ``<owner>/<repo>[/<path...>][#<ref>]`` (``/tree/<ref>/...`` is recognized too)

A ref given after ``#`` always wins over one taken from a ``/tree/<ref>`` segment.
"""

import logging
import re
from urllib.parse import unquote
from urllib.parse import urlsplit

from .exceptions import InvalidSourceError
from .schema import ParsedGithubSource

logger = logging.getLogger(__name__)

GITHUB_HOSTS = frozenset({"github.com", "www.github.com"})
GITHUB_TOKEN_PATTERN = re.compile(r"[A-Za-z0-9._-]+")
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

EMPTY_REF_MESSAGE = 'GitHub source ref cannot be empty after "#".'


def parse_github_example_source(source: str) -> ParsedGithubSource:
    """
    Parse a GitHub URL or ``owner/repo`` shorthand.

    Args:
        source: User-supplied example source

    Returns:
        ParsedGithubSource with ref defaulting to ``HEAD``

    Raises:
        InvalidSourceError: If the source is empty or malformed

    Example:
        >>> parsed = parse_github_example_source("acme/capt-starter/examples/foo#main")
        >>> parsed.normalized_source
        'https://github.com/acme/capt-starter/tree/main/examples/foo'
    """
    trimmed = source.strip()
    if not trimmed:
        raise InvalidSourceError("Example source cannot be empty.")

    if trimmed.endswith("#"):
        raise InvalidSourceError(EMPTY_REF_MESSAGE, context={"source": trimmed})

    if trimmed.startswith(("http://", "https://")):
        parsed = _parse_url_source(trimmed)
    else:
        parsed = _parse_repo_source(trimmed)

    logger.debug(f"Parsed example source {trimmed!r} as {parsed.normalized_source}")
    return parsed


def _parse_url_source(raw_source: str) -> ParsedGithubSource:
    url = urlsplit(raw_source)
    if url.hostname not in GITHUB_HOSTS:
        raise InvalidSourceError(
            "Example source URL must point to github.com.",
            context={"source": raw_source, "host": url.hostname},
        )

    segments = _split_segments(url.path)
    if len(segments) < 2:
        raise InvalidSourceError(
            "GitHub example URL must include owner and repository.",
            context={"source": raw_source},
        )

    ref_from_hash = _decode_ref(url.fragment) if url.fragment else None
    return _build_from_segments(segments, ref_from_hash, "GitHub tree URL must include a branch or tag.")


def _parse_repo_source(raw_source: str) -> ParsedGithubSource:
    main_part, hash_sign, fragment = raw_source.partition("#")
    ref_from_hash = _decode_ref(fragment) if hash_sign else None

    segments = _split_segments(main_part)
    if len(segments) < 2:
        raise InvalidSourceError(
            'GitHub repo source must use "<owner>/<repo>" format.',
            context={"source": raw_source},
        )

    return _build_from_segments(segments, ref_from_hash, "GitHub tree source must include a branch or tag.")


def _build_from_segments(
    segments: list[str],
    ref_from_hash: str | None,
    missing_tree_ref_message: str,
) -> ParsedGithubSource:
    owner = _validate_token(segments[0], "owner")
    repo = _validate_token(_strip_git_suffix(segments[1]), "repository")
    ref = ref_from_hash or "HEAD"
    sub_path = ""

    if len(segments) > 2 and segments[2] == "tree":
        if len(segments) < 4 or not segments[3]:
            raise InvalidSourceError(missing_tree_ref_message, context={"owner": owner, "repo": repo})
        ref = ref_from_hash or segments[3]
        sub_path = "/".join(segments[4:])
    elif len(segments) > 2:
        sub_path = "/".join(segments[2:])

    return build_parsed_source(owner, repo, ref, sub_path)


def build_parsed_source(owner: str, repo: str, ref: str, sub_path: str) -> ParsedGithubSource:
    """Assemble a ParsedGithubSource, rebuilding its canonical URL."""
    normalized_ref = ref.strip() or "HEAD"
    normalized_sub_path = sub_path.strip("/")
    suffix = f"/{normalized_sub_path}" if normalized_sub_path else ""

    return ParsedGithubSource(
        owner=owner,
        repo=repo,
        ref=normalized_ref,
        sub_path=normalized_sub_path,
        normalized_source=f"https://github.com/{owner}/{repo}/tree/{normalized_ref}{suffix}",
    )


def _split_segments(path: str) -> list[str]:
    segments = []
    for segment in path.split("/"):
        if not segment:
            continue
        try:
            segments.append(_decode_component(segment))
        except ValueError as e:
            raise InvalidSourceError(
                "Example source path is not valid URL encoding.",
                context={"segment": segment},
            ) from e
    return segments


def _decode_ref(fragment: str) -> str:
    raw_ref = fragment.strip()
    if not raw_ref:
        raise InvalidSourceError(EMPTY_REF_MESSAGE)

    try:
        return _decode_component(raw_ref)
    except ValueError as e:
        raise InvalidSourceError(
            "GitHub source ref is not valid URL encoding.",
            context={"ref": raw_ref},
        ) from e


def _decode_component(value: str) -> str:
    """Percent-decode strictly: stray ``%`` and invalid UTF-8 both fail."""
    if _MALFORMED_ESCAPE.search(value):
        raise ValueError(f"malformed percent escape in {value!r}")
    # UnicodeDecodeError is a ValueError
    return unquote(value, errors="strict")


def _validate_token(value: str, label: str) -> str:
    if GITHUB_TOKEN_PATTERN.fullmatch(value):
        return value
    raise InvalidSourceError(f'Invalid GitHub {label} in example source: "{value}".', context={label: value})


def _strip_git_suffix(repo: str) -> str:
    return repo[: -len(".git")] if repo.endswith(".git") else repo
