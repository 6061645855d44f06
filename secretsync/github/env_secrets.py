from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from ..errors import DeleteError, FetchError, UpsertError
from .sealed_box import seal_secret

GITHUB_API_URL = "https://api.github.com"
PAGE_SIZE = 100
REQUEST_TIMEOUT = 30


@dataclass(frozen=True)
class PublicKeyInfo:
    key: str
    key_id: str


def _github_api_headers(token: str, user_agent: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
        "User-Agent": user_agent,
    }


def _body(r: Any) -> str:
    return str(getattr(r, "text", "") or "")[:2000]


class GitHubEnvironmentSecretsClient:
    """Environment secrets endpoints of the GitHub REST API.

    Endpoints (all under /repositories/<repository_id>/environments/<env>/secrets):
      - GET    ?per_page=100&page=n   list (names only; values are never returned)
      - GET    /public-key            sealing key for the environment
      - PUT    /<NAME>                create (201) or update (204)
      - DELETE /<NAME>                delete (204)
    """

    def __init__(
        self,
        *,
        repository: str,
        repository_id: str,
        token: str,
        session: Optional[Any] = None,
        api_url: str = GITHUB_API_URL,
    ):
        self.repository = repository
        self.repository_id = str(repository_id)
        self.api_url = api_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        user_agent = repository.split("/", 1)[-1]
        self.headers = _github_api_headers(token, user_agent)

    def _secrets_url(self, environment: str, suffix: str = "") -> str:
        env = quote(environment, safe="")
        return f"{self.api_url}/repositories/{self.repository_id}/environments/{env}/secrets{suffix}"

    def _secret_url(self, environment: str, name: str) -> str:
        return self._secrets_url(environment, "/" + quote(name.upper(), safe=""))

    def _get_json(self, url: str, params: Optional[Dict[str, Any]], what: str) -> Dict[str, Any]:
        try:
            r = self.session.get(url, headers=self.headers, params=params, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as e:
            raise FetchError(f"Error while fetching {what} from github. Error: {e}") from e
        if r.status_code != 200:
            raise FetchError(
                f"Error while fetching {what} from github. Status code: {r.status_code} Response: {_body(r)}"
            )
        try:
            data = r.json()
        except ValueError as e:
            raise FetchError(f"Error while fetching {what} from github. Invalid JSON response: {e}") from e
        if not isinstance(data, dict):
            raise FetchError(f"Error while fetching {what} from github. Unexpected response: {_body(r)}")
        return data

    def list_secret_names(self, environment: str) -> List[str]:
        """Return every secret name in the environment, following pagination."""
        url = self._secrets_url(environment)
        names: List[str] = []
        page = 1
        while True:
            data = self._get_json(url, {"per_page": PAGE_SIZE, "page": page}, "secrets")
            secrets = data.get("secrets") or []
            total = data.get("total_count", 0) or 0
            if not isinstance(secrets, list) or not isinstance(total, int) or isinstance(total, bool):
                raise FetchError(f"Error while fetching secrets from github. Unexpected response: {str(data)[:2000]}")
            for s in secrets:
                if not isinstance(s, dict) or not str(s.get("name") or ""):
                    raise FetchError(f"Error while fetching secrets from github. Unexpected secret entry: {str(s)[:2000]}")
                names.append(str(s["name"]))
            if not secrets or len(names) >= total:
                return names
            page += 1

    def get_public_key(self, environment: str) -> PublicKeyInfo:
        data = self._get_json(self._secrets_url(environment, "/public-key"), None, "secrets public key")
        key = str(data.get("key", "") or "")
        key_id = str(data.get("key_id", "") or "")
        if not key or not key_id:
            raise FetchError("Error while fetching secrets public key from github. Response is missing key/key_id")
        return PublicKeyInfo(key=key, key_id=key_id)

    def upsert_secret(self, name: str, plaintext: str, public_key: PublicKeyInfo, environment: str) -> int:
        """Seal and store a secret. Returns 201 when created, 204 when updated."""
        try:
            encrypted = seal_secret(plaintext, public_key.key)
        except (TypeError, ValueError) as e:
            raise UpsertError(f"Error while encrypting secret {name}. Error: {e}") from e
        payload = {"encrypted_value": encrypted, "key_id": public_key.key_id}
        try:
            r = self.session.put(
                self._secret_url(environment, name),
                headers=self.headers,
                json=payload,
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise UpsertError(f"Error while setting secret {name} on github. Error: {e}") from e
        if r.status_code not in (201, 204):
            raise UpsertError(
                f"Error while setting secret {name} on github. Status code: {r.status_code} Response: {_body(r)}"
            )
        return r.status_code

    def delete_secret(self, name: str, environment: str) -> None:
        try:
            r = self.session.delete(self._secret_url(environment, name), headers=self.headers, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as e:
            raise DeleteError(f"Error while removing secret {name} on github. Error: {e}") from e
        if r.status_code != 204:
            raise DeleteError(
                f"Error while removing secret {name} on github. Status code: {r.status_code} Response: {_body(r)}"
            )
