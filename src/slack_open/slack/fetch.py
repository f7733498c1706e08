"""Fetch the full channel list from Slack.

Uses conversations.list with cursor pagination. Pages are requested one at
a time (each request needs the previous page's cursor) and any failure
aborts the whole fetch; there are no partial results and no retries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError, SlackClientError

from ..exceptions import RemoteFetchError
from ..log import get_logger

_log = get_logger("fetch")

# conversations.list caps `limit` at 1000
PAGE_LIMIT = 1000
CHANNEL_TYPES = "public_channel,private_channel"

# Upper bound on pages per fetch. 1000 pages of 1000 channels is far beyond
# any real workspace; hitting it means the API keeps handing out cursors.
DEFAULT_MAX_PAGES = 1000


@dataclass(frozen=True)
class RemoteChannel:
    """A channel as reported by Slack.

    member_count is None when Slack didn't include num_members.
    """

    name: str
    id: str
    member_count: int | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> RemoteChannel:
        try:
            return cls(name=data["name"], id=data["id"], member_count=data.get("num_members"))
        except KeyError as e:
            raise RemoteFetchError(f"Malformed channel in conversations.list: missing {e}") from e


def make_client(token: str) -> WebClient:
    """Create a Slack Web API client authenticated with `token`."""
    return WebClient(token=token)


def fetch_all(
    client: WebClient, *, max_pages: int | None = DEFAULT_MAX_PAGES
) -> list[RemoteChannel]:
    """Fetch every non-archived public and private channel visible to the token.

    Args:
        client: Slack WebClient (anything with a compatible conversations_list)
        max_pages: Stop with an error after this many pages; None for no limit

    Returns:
        All channels, in the order Slack returned them

    Raises:
        RemoteFetchError: on any API or transport failure, when the API
            repeats a cursor, or when max_pages is exceeded
    """
    channels: list[RemoteChannel] = []
    seen_cursors: set[str] = set()
    cursor = None
    pages = 0

    while True:
        if max_pages is not None and pages >= max_pages:
            raise RemoteFetchError(
                f"conversations.list still paginating after {max_pages} pages; giving up"
            )

        page = _fetch_page(client, cursor)
        pages += 1
        channels.extend(RemoteChannel.from_api(c) for c in page.get("channels", []))
        _log.debug("page %d: %d channels so far", pages, len(channels))

        next_cursor = (page.get("response_metadata") or {}).get("next_cursor", "")
        if not next_cursor:
            break
        if next_cursor in seen_cursors:
            raise RemoteFetchError(f"conversations.list returned cursor {next_cursor!r} twice")
        seen_cursors.add(next_cursor)
        cursor = next_cursor

    _log.info("fetched %d channels in %d page(s)", len(channels), pages)
    return channels


def _fetch_page(client: WebClient, cursor: str | None) -> Any:
    kwargs: dict[str, Any] = {
        "exclude_archived": True,
        "types": CHANNEL_TYPES,
        "limit": PAGE_LIMIT,
    }
    if cursor:
        kwargs["cursor"] = cursor

    try:
        response = client.conversations_list(**kwargs)
    except SlackApiError as e:
        error = e.response.get("error", "unknown error") if e.response is not None else str(e)
        raise RemoteFetchError(f"conversations.list failed: {error}") from e
    except (SlackClientError, OSError) as e:
        raise RemoteFetchError(f"conversations.list failed: {e}") from e

    if not response.get("ok", False):
        raise RemoteFetchError(
            f"conversations.list failed: {response.get('error', 'unknown error')}"
        )
    return response
