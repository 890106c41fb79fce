"""Latest-version lookups against the npm registry."""

from __future__ import annotations

import json
import logging
import typing as t
from urllib.parse import quote

import httpx

from .errors import RegistryError

if t.TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

NPM_REGISTRY_URL = "https://registry.npmjs.org"


def is_registry_package(name: str) -> bool:
    """Return whether *name* looks like something the registry can answer for.

    Scoped names (``@scope/pkg``) and names without a ``/`` are looked up.
    Anything else, such as ``owner/repo`` style names, is not.

    Examples
    --------
    >>> is_registry_package("left-pad")
    True
    >>> is_registry_package("@acme/widgets")
    True
    >>> is_registry_package("acme/widgets")
    False
    >>> is_registry_package("")
    False
    """
    if not name:
        return False
    return name.startswith("@") or "/" not in name


def package_url(base_url: str, name: str) -> str:
    """Build the registry document URL for *name*.

    Examples
    --------
    >>> package_url("https://registry.npmjs.org", "@acme/widgets")
    'https://registry.npmjs.org/@acme/widgets'
    >>> package_url("https://registry.npmjs.org/", "odd name?")
    'https://registry.npmjs.org/odd%20name%3F'
    """
    return f"{base_url.rstrip('/')}/{quote(name, safe='@/')}"


class RegistryClient:
    """Synchronous client for package metadata documents.

    Parameters
    ----------
    base_url : str
        Registry root, ``https://registry.npmjs.org`` by default.
    client : httpx.Client, optional
        Transport to use. When omitted the registry client owns one and
        closes it in :meth:`close`.
    """

    def __init__(
        self, base_url: str = NPM_REGISTRY_URL, client: httpx.Client | None = None
    ) -> None:
        self.base_url = base_url
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client()

    def __enter__(self) -> RegistryClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def latest_version(self, name: str) -> str:
        """Return the ``latest`` dist-tag of *name*, or ``""`` when unknown.

        Raises
        ------
        RegistryError
            On any status other than 200 or 404, on a body that is not JSON,
            and on transport failures.
        """
        if not is_registry_package(name):
            logger.debug("Not looking up %r: not a registry package name", name)
            return ""

        url = package_url(self.base_url, name)
        logger.debug("GET %s", url)
        try:
            response = self._client.get(url)
        except httpx.HTTPError as exc:
            raise RegistryError(f"npm registry request failed: {exc}") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            return ""
        if response.status_code != httpx.codes.OK:
            raise RegistryError(
                f"npm registry returned status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = t.cast("object", response.json())
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise RegistryError(f"invalid npm registry response: {exc}") from exc

        return _latest_tag(data)


def _latest_tag(data: object) -> str:
    """Pull ``dist-tags.latest`` out of a registry document.

    Examples
    --------
    >>> _latest_tag({"dist-tags": {"latest": "2.1.0", "next": "3.0.0-rc.1"}})
    '2.1.0'
    >>> _latest_tag({"name": "foo"})
    ''
    >>> _latest_tag({"dist-tags": {"latest": 7}})
    ''
    """
    if not isinstance(data, dict):
        return ""
    dist_tags = t.cast("dict[str, object]", data).get("dist-tags")
    if not isinstance(dist_tags, dict):
        return ""
    latest = t.cast("dict[str, object]", dist_tags).get("latest")
    return latest if isinstance(latest, str) else ""
