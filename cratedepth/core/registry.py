import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from cratedepth.__version__ import __version__
from cratedepth.core.model import DependencyEntry, PackageSummary

API_URL = "https://crates.io/api/v1"

# crates.io rejects requests without a descriptive User-Agent
USER_AGENT = f"cratedepth/{__version__}"


class RegistryError(Exception):
    """Raised when the registry cannot be reached or answers with garbage."""


class PackageNotFound(RegistryError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Package '{name}' was not found on crates.io")
        self.name = name


class CratesIoClient:
    """
    Blocking crates.io client. One get_package() call is one logical fetch:
    the crate lookup plus the dependency list of its newest version.
    """

    def __init__(self, base_url: str = API_URL, transport: Optional[httpx.BaseTransport] = None) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            headers={"User-Agent": USER_AGENT},
            transport=transport,
        )

    def __enter__(self) -> "CratesIoClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get_package(self, name: str) -> PackageSummary:
        encoded = quote(name, safe="")

        crate_payload = self._get_json(f"/crates/{encoded}", name)
        try:
            crate = crate_payload["crate"]
            version = crate["max_version"]
            url = crate.get("documentation") or crate.get("homepage") or crate.get("repository") or ""
            description = (crate.get("description") or "").strip()
        except (KeyError, TypeError, AttributeError) as e:
            raise RegistryError(f"Malformed response for '{name}': missing {e}") from e
        if not isinstance(version, str) or not version:
            raise RegistryError(f"Malformed response for '{name}': no published version")

        deps_payload = self._get_json(
            f"/crates/{encoded}/{quote(version, safe='')}/dependencies", name, missing_is_not_found=False
        )
        try:
            dependencies = tuple(self._parse_dependency(dep) for dep in deps_payload["dependencies"])
        except (KeyError, TypeError, AttributeError) as e:
            raise RegistryError(f"Malformed dependency list for '{name}': missing {e}") from e
        except ValueError as e:
            raise RegistryError(f"Malformed dependency list for '{name}': {e}") from e

        logging.debug(f"{name} {version}: {len(dependencies)} dependencies")
        return PackageSummary(name, version, url, description, dependencies)

    @staticmethod
    def _parse_dependency(dep: Dict[str, Any]) -> DependencyEntry:
        crate_id = dep["crate_id"]
        requirement = dep.get("req") or ""
        kind = dep.get("kind") or "normal"
        if not isinstance(crate_id, str) or not crate_id:
            raise ValueError(f"invalid crate_id {crate_id!r}")
        if not isinstance(requirement, str):
            raise ValueError(f"invalid req {requirement!r} for {crate_id}")
        if not isinstance(kind, str):
            raise ValueError(f"invalid kind {kind!r} for {crate_id}")

        return DependencyEntry(
            name=crate_id,
            requirement=requirement,
            kind=kind,
            optional=bool(dep.get("optional", False)),
        )

    def _get_json(self, path: str, name: str, missing_is_not_found: bool = True) -> Dict[str, Any]:
        logging.debug(f"GET {path}")
        try:
            response = self._client.get(path)
        except httpx.HTTPError as e:
            raise RegistryError(f"Request for '{name}' failed: {e}") from e

        if response.status_code == 404 and missing_is_not_found:
            raise PackageNotFound(name)
        if not response.is_success:
            raise RegistryError(
                f"crates.io API Error {response.status_code} for '{name}': {self._error_detail(response)}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise RegistryError(f"Malformed response for '{name}': {e}") from e

        if not isinstance(payload, dict):
            raise RegistryError(f"Malformed response for '{name}': expected a JSON object")
        return payload

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            errors = response.json().get("errors")
            if isinstance(errors, list):
                details = [err.get("detail") for err in errors if isinstance(err, dict)]
                details = [d for d in details if isinstance(d, str) and d]
                if details:
                    return "; ".join(details)
        except (ValueError, AttributeError):
            pass
        return response.text or response.reason_phrase
