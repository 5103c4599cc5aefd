"""
Find GitLab merge request links in Slack message text.

Slack wraps links as ``<url>`` or ``<url|label>``. Only link tokens are
parsed; bare prose mentioning gitlab is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import MalformedReferenceError

HOST_MARKER = "gitlab"
PATH_MARKER = "-/merge_requests/"

LINK_OPEN = "<"
LINK_CLOSE = ">"
LABEL_SEP = "|"


@dataclass(frozen=True)
class MergeRequestReference:
    namespace: str
    project: str
    number: int

    @property
    def project_path(self) -> str:
        return f"{self.namespace}/{self.project}"


def looks_like_reference(text: str | None) -> bool:
    """Cheap pre-filter. May accept text that yields no references."""
    if not text:
        return False
    return HOST_MARKER in text and PATH_MARKER in text


def extract_references(text: str | None) -> list[MergeRequestReference]:
    """Return one reference per merge request link, in message order.

    Raises MalformedReferenceError if any link passes the gate but does not
    end in ``<namespace>/<project>/-/merge_requests/<number>``.
    """
    if not text:
        return []
    refs: list[MergeRequestReference] = []
    # fragment 0 precedes the first "<" and is never a link
    for fragment in text.split(LINK_OPEN)[1:]:
        if not looks_like_reference(fragment):
            continue
        if LINK_CLOSE not in fragment:
            continue
        url = fragment.split(LINK_CLOSE, 1)[0].split(LABEL_SEP, 1)[0]
        if not looks_like_reference(url):
            continue
        refs.append(parse_reference_url(url))
    return refs


def parse_reference_url(url: str) -> MergeRequestReference:
    parts = url.split("/")
    if len(parts) < 5:
        raise MalformedReferenceError(url, "too few path segments")
    namespace, project, dash, kind, number = parts[-5:]
    if dash != "-" or kind != "merge_requests":
        raise MalformedReferenceError(url, "unexpected path shape")
    if not namespace or not project:
        raise MalformedReferenceError(url, "empty namespace or project")
    if not (number.isascii() and number.isdigit()):
        raise MalformedReferenceError(url, f"merge request id {number!r} is not a number")
    return MergeRequestReference(namespace=namespace, project=project, number=int(number))
