# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Bearer token resolution.

The token is resolved once, when the context is constructed, and then sent
unchanged as ``Authorization: Bearer <token>`` for the lifetime of the context.
"""

from __future__ import annotations

from typing import Dict, Optional

from azure.core.credentials import TokenCredential

from ..common.constants import HEADER_AUTHORIZATION


class _AuthManager:
    """
    Resolve the static bearer token from a token string or an Azure credential.

    :param token: Pre-issued bearer token. Takes precedence over ``credential``.
    :type token: :class:`str` | None
    :param credential: Azure Identity credential used to acquire a token once.
    :type credential: ~azure.core.credentials.TokenCredential | None
    :param scope: OAuth scope requested from ``credential``. Defaults to ``"<base_url>/.default"``.
    :type scope: :class:`str` | None
    """

    def __init__(
        self,
        token: Optional[str] = None,
        credential: Optional[TokenCredential] = None,
        scope: Optional[str] = None,
    ) -> None:
        self._token = token or None
        self.credential = credential
        self.scope = scope

    def _acquire_token(self) -> Optional[str]:
        """Return the bearer token, acquiring it from the credential on first use."""
        if self._token is None and self.credential is not None:
            if not self.scope:
                raise ValueError("scope is required to acquire a token from a credential.")
            self._token = self.credential.get_token(self.scope).token
        return self._token

    def headers(self) -> Dict[str, str]:
        """Return the ``Authorization`` header, or an empty mapping for anonymous access."""
        token = self._acquire_token()
        if not token:
            return {}
        return {HEADER_AUTHORIZATION: f"Bearer {token}"}
