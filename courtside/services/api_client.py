"""
HTTP client for the booking platform backend.

Covers the onboarding and football endpoints. Every call resolves to a value:
the parsed response on success, ``None`` (or an empty list for list
endpoints) on any failure. Failures are logged as ApiError and never raised
to the caller. The client never reads or writes domain stores.
"""

import asyncio
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

import aiohttp
from pydantic import BaseModel, ValidationError

from courtside.config import settings
from courtside.config.logging_config import get_logger
from courtside.config.settings import BackendSettings
from courtside.services.base_service import BaseService
from courtside.services.payloads import BasicOnboardingInfo, FootballProfileRegister, FootballTeamCreate
from courtside.utils.error_handling import ApiError, ErrorSeverity

logger = get_logger(__name__)

P = TypeVar("P", bound=BaseModel)

ONBOARDING_PREFIX = "/api/v1/onboarding"
FOOTBALL_PREFIX = "/api/v1/football"


class BackendClient(BaseService):
    """
    Async client for the backend REST API.

    Use it as an async context manager so the aiohttp session is closed:

        async with BackendClient() as client:
            players = await client.fetch_all_players()
    """

    def __init__(self, config: Optional[BackendSettings] = None):
        """
        Initialize the client.

        Args:
            config: Backend settings; defaults to the application settings
        """
        super().__init__(config or settings.backend)
        self.base_url = self.config.base_url
        self._session: Optional[aiohttp.ClientSession] = None

    def _validate_config(self) -> None:
        if not self.config.base_url:
            raise ValueError("Backend base URL is required")
        if self.config.timeout_seconds <= 0:
            raise ValueError("Backend timeout must be positive")

    @property
    def connected(self) -> bool:
        return self._session is not None and not self._session.closed

    async def connect(self) -> bool:
        if not self.connected:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
            logger.debug(f"Opened backend session for {self.base_url}")
        return True

    async def disconnect(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None
            logger.debug("Closed backend session")

    async def health_check(self) -> Dict[str, Any]:
        return {
            "service": self.__class__.__name__,
            "base_url": self.base_url,
            "connected": self.connected,
        }

    # ---------------------------------------------------------------------
    # Onboarding
    # ---------------------------------------------------------------------

    async def basic_info_register(self, payload: Union[BasicOnboardingInfo, Dict[str, Any]]) -> Optional[Any]:
        """
        Register a new user's basic details.

        Args:
            payload: Onboarding details, e.g. the output of SignUpStore.take_payload()

        Returns:
            The created user as returned by the server, or None on failure
        """
        body = self._validate(BasicOnboardingInfo, payload, "basic_info_register")
        if body is None:
            return None
        return await self._request("POST", f"{ONBOARDING_PREFIX}/basicInfo", "basic_info_register", json=body)

    # ---------------------------------------------------------------------
    # Football
    # ---------------------------------------------------------------------

    async def profile_register(self, payload: Union[FootballProfileRegister, Dict[str, Any]]) -> Optional[Any]:
        body = self._validate(FootballProfileRegister, payload, "profile_register")
        if body is None:
            return None
        return await self._request("POST", f"{FOOTBALL_PREFIX}/profileRegister", "profile_register", json=body)

    async def profile_check(self, user_id: int) -> Optional[Any]:
        """Ask whether a user already has a football profile."""
        return await self._request("GET", f"{FOOTBALL_PREFIX}/profileCheck/{user_id}", "profile_check")

    async def create_team(self, payload: Union[FootballTeamCreate, Dict[str, Any]]) -> Optional[Any]:
        body = self._validate(FootballTeamCreate, payload, "create_team")
        if body is None:
            return None
        return await self._request("POST", f"{FOOTBALL_PREFIX}/createTeam", "create_team", json=body)

    async def fetch_all_players(self) -> List[Any]:
        data = await self._request("GET", f"{FOOTBALL_PREFIX}/fetchPlayers", "fetch_all_players")
        return _list_field(data, "players")

    async def fetch_my_teams(self, user_id: int) -> List[Any]:
        data = await self._request(
            "GET", f"{FOOTBALL_PREFIX}/myTeams", "fetch_my_teams", params={"userId": str(user_id)}
        )
        return _list_field(data, "teams")

    async def fetch_all_teams_with_players(self) -> List[Any]:
        data = await self._request("GET", f"{FOOTBALL_PREFIX}/allTeams", "fetch_all_teams_with_players")
        return data if isinstance(data, list) else []

    # ---------------------------------------------------------------------
    # Internals
    # ---------------------------------------------------------------------

    def _validate(self, model: Type[P], payload: Union[P, Dict[str, Any]], operation: str) -> Optional[Dict[str, Any]]:
        try:
            validated = payload if isinstance(payload, model) else model.model_validate(payload)
            return validated.model_dump()
        except ValidationError as e:
            self.handle_error(
                ApiError(f"Invalid {model.__name__} payload: {str(e)}", severity=ErrorSeverity.WARNING, cause=e),
                operation,
            )
            return None

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Optional[Any]:
        """
        Send one request and decode the JSON response.

        Args:
            method: HTTP method
            path: Path below the base URL
            operation: Operation name for error reports
            json: Optional JSON body
            params: Optional query parameters

        Returns:
            Decoded response body, or None on any failure
        """
        await self.connect()
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")

        try:
            async with self._session.request(method, url, json=json, params=params) as response:
                if response.status >= 400:
                    text = await response.text()
                    raise ApiError(
                        f"{method} {path} returned {response.status}: {text[:200]}",
                        severity=ErrorSeverity.ERROR,
                        status_code=response.status,
                    )
                return await response.json(content_type=None)

        except ApiError as e:
            self.handle_error(e, operation)
            return None
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            self.handle_error(e, operation)
            return None


def _list_field(data: Any, name: str) -> List[Any]:
    if isinstance(data, dict) and isinstance(data.get(name), list):
        return data[name]
    return []
