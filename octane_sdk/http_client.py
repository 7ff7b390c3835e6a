"""
Octane HTTP client
Session-based transport shared by every context created from one sign-in
"""

import logging
from typing import Any, Dict, Optional

import requests

from .auth import Authentication
from .exceptions import (
    OctaneAPIError,
    OctaneAuthenticationError,
    OctaneNotFoundError,
)

logger = logging.getLogger(__name__)

SIGN_IN_PATH = '/authentication/sign_in'
SIGN_OUT_PATH = '/authentication/sign_out'

# Cookie Octane sets after a successful sign in
SESSION_COOKIE = 'LWSSO_COOKIE_KEY'


class OctaneHttpClient:
    """
    Thin wrapper over ``requests.Session`` that knows how to sign in to
    Octane and how to turn error responses into SDK exceptions.

    URLs passed to :meth:`request` are absolute; contexts build them from
    their base URL.
    """

    def __init__(self, server_url: str, timeout: int = 30):
        self.server_url = server_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers['Accept'] = 'application/json'
        self._authentication: Optional[Authentication] = None

    def authenticate(self, authentication: Authentication) -> None:
        """Sign in and keep the session cookie for later requests

        Raises:
            OctaneAuthenticationError: If the server rejects the credentials
        """
        url = f'{self.server_url}{SIGN_IN_PATH}'
        headers = authentication.headers()
        if headers:
            self.session.headers.update(headers)

        try:
            response = self.session.post(
                url,
                json=authentication.sign_in_payload(),
                timeout=self.timeout,
            )
        except requests.Timeout:
            raise TimeoutError(f'Request to {url} timed out after {self.timeout}s')

        if response.status_code in (401, 403):
            raise OctaneAuthenticationError(
                f'Sign in to {self.server_url} failed', status_code=response.status_code
            )
        self._raise_for_status(response, url)

        self._authentication = authentication
        logger.info('Signed in to %s', self.server_url)

    @property
    def is_authenticated(self) -> bool:
        return self._authentication is not None

    def sign_out(self) -> None:
        """Sign out of the server and drop any held cookies"""
        if self._authentication is None:
            return
        url = f'{self.server_url}{SIGN_OUT_PATH}'
        try:
            response = self.session.post(url, timeout=self.timeout)
            self._raise_for_status(response, url)
        finally:
            self.session.cookies.clear()
            self._authentication = None
        logger.info('Signed out of %s', self.server_url)

    def request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
        files: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        raw: bool = False,
    ) -> Any:
        """Make HTTP request to API

        A 401 triggers one re-authentication with the last credentials
        followed by a single retry.

        Returns:
            Decoded JSON, text, bytes when ``raw`` is set, or None for 204
        """
        response = self._send(method, url, params, json, files, headers)

        if response.status_code == 401 and self._authentication is not None:
            logger.warning('Session expired, signing in again to %s', self.server_url)
            self.authenticate(self._authentication)
            response = self._send(method, url, params, json, files, headers)

        self._raise_for_status(response, url)

        if response.status_code == 204:
            return None
        if raw:
            return response.content

        try:
            return response.json()
        except ValueError:
            return response.text

    def _send(self, method, url, params, json, files, headers) -> requests.Response:
        logger.debug('%s %s params=%s', method, url, params)
        try:
            return self.session.request(
                method,
                url,
                params=params,
                json=json,
                files=files,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.Timeout:
            raise TimeoutError(f'Request to {url} timed out after {self.timeout}s')

    @staticmethod
    def _raise_for_status(response: requests.Response, url: str) -> None:
        if response.status_code < 400:
            return

        error_code = None
        description = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            error_code = body.get('error_code')
            description = body.get('description')

        message = f'{response.status_code} error for {url}'
        if description:
            message = f'{message}: {description}'

        if response.status_code == 404:
            raise OctaneNotFoundError(message, error_code=error_code, description=description)
        if response.status_code in (401, 403):
            raise OctaneAuthenticationError(message, status_code=response.status_code)
        raise OctaneAPIError(
            message,
            status_code=response.status_code,
            error_code=error_code,
            description=description,
        )

    def close(self):
        """Close the session"""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
