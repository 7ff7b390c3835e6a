"""Authentication objects used to sign in to an Octane server."""

from typing import Any, Dict, Optional


class Authentication:
    """Base class for sign-in credentials.

    Args:
        client_type: Optional value sent in the ``HPECLIENTTYPE`` header
    """

    def __init__(self, client_type: Optional[str] = None):
        self.client_type = client_type

    def sign_in_payload(self) -> Dict[str, Any]:
        raise NotImplementedError

    def headers(self) -> Dict[str, str]:
        if self.client_type:
            return {'HPECLIENTTYPE': self.client_type}
        return {}


class UserAuthentication(Authentication):
    """Sign in with a user name and password"""

    def __init__(self, user: str, password: str, client_type: Optional[str] = None):
        super().__init__(client_type)
        self.user = user
        self.password = password

    def sign_in_payload(self) -> Dict[str, Any]:
        return {'user': self.user, 'password': self.password}

    def __repr__(self) -> str:
        return f'UserAuthentication(user={self.user!r})'


class ClientAuthentication(Authentication):
    """Sign in with API access keys (client id and secret)"""

    def __init__(self, client_id: str, client_secret: str, client_type: Optional[str] = None):
        super().__init__(client_type)
        self.client_id = client_id
        self.client_secret = client_secret

    def sign_in_payload(self) -> Dict[str, Any]:
        return {'client_id': self.client_id, 'client_secret': self.client_secret}

    def __repr__(self) -> str:
        return f'ClientAuthentication(client_id={self.client_id!r})'
