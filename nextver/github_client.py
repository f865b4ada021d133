import logging

import httpx

from .errors import RefAlreadyExistsError, RemoteApiError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"


def _client(token: str, api_url: str = DEFAULT_API_URL) -> httpx.AsyncClient:
    headers = {
        "Accept": "application/vnd.github+json",
        "Authorization": f"Bearer {token}",
        "X-GitHub-Api-Version": "2022-11-28",
    }
    return httpx.AsyncClient(base_url=api_url.rstrip("/"), headers=headers, timeout=10)


async def _request(client: httpx.AsyncClient, operation: str, method: str, url: str, **kw) -> httpx.Response:
    try:
        resp = await client.request(method, url, **kw)
    except httpx.HTTPError as e:
        raise RemoteApiError(operation, str(e) or type(e).__name__) from e
    return resp


def _raise_for_status(operation: str, resp: httpx.Response) -> None:
    if resp.status_code // 100 != 2:
        try:
            message = resp.json().get("message") or resp.reason_phrase
        except ValueError:
            message = resp.reason_phrase
        raise RemoteApiError(operation, message, status=resp.status_code, body=resp.text)


async def get_ref(client: httpx.AsyncClient, owner: str, repo: str, ref: str) -> bool:
    """True when ``ref`` (e.g. ``tags/v1.2.0``) exists; 404 means it does not."""
    resp = await _request(client, "getRef", "GET", f"/repos/{owner}/{repo}/git/ref/{ref}")
    if resp.status_code == 404:
        return False
    _raise_for_status("getRef", resp)
    return True


async def create_ref(client: httpx.AsyncClient, owner: str, repo: str, ref: str, sha: str) -> None:
    resp = await _request(
        client, "createRef", "POST", f"/repos/{owner}/{repo}/git/refs", json={"ref": ref, "sha": sha}
    )
    _raise_for_status("createRef", resp)


async def update_ref(
    client: httpx.AsyncClient, owner: str, repo: str, ref: str, sha: str, force: bool = True
) -> None:
    resp = await _request(
        client,
        "updateRef",
        "PATCH",
        f"/repos/{owner}/{repo}/git/refs/{ref}",
        json={"sha": sha, "force": force},
    )
    _raise_for_status("updateRef", resp)


async def create_ref_on_github(
    token: str,
    owner: str,
    repo: str,
    tag: str,
    sha: str,
    upsert: bool = False,
    api_url: str = DEFAULT_API_URL,
) -> str:
    """Create ``refs/tags/<tag>`` pointing at ``sha``; returns "created" or "updated".

    An existing tag is force-moved when ``upsert`` is set and rejected with
    RefAlreadyExistsError otherwise.
    """
    logger.info("Generating the ref [%s] on GitHub...", tag)
    async with _client(token, api_url) as client:
        found = await get_ref(client, owner, repo, f"tags/{tag}")
        if found and not upsert:
            raise RefAlreadyExistsError(tag)
        if found:
            await update_ref(client, owner, repo, f"tags/{tag}", sha, force=True)
            logger.info("Finished updating the ref on GitHub.")
            return "updated"
        await create_ref(client, owner, repo, f"refs/tags/{tag}", sha)
        logger.info("Finished creating the ref on GitHub.")
        return "created"
