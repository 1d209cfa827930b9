"""
Base service interface for external API integrations.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from courtside.config.logging_config import get_logger
from courtside.utils.error_handling import ApiError, ErrorSeverity

logger = get_logger(__name__)


class BaseService(ABC):
    """Base class for all external service integrations.

    Subclasses talk to one remote service. Failures never escape a public
    call: they are turned into an ApiError, logged, and reported through
    the call's empty return value.
    """

    def __init__(self, config: Any):
        """Initialize the service with configuration.

        Args:
            config: Service configuration (a settings model)
        """
        self.config = config
        self._validate_config()

    @abstractmethod
    def _validate_config(self) -> None:
        """Validate the service configuration.

        Raises:
            ValueError: If configuration is invalid
        """
        pass

    @abstractmethod
    async def connect(self) -> bool:
        """Open the underlying connection resources.

        Returns:
            bool: True if the service is ready for requests
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the underlying connection resources."""
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """Check the health of the service connection.

        Returns:
            Dict[str, Any]: Health status information
        """
        pass

    async def __aenter__(self) -> "BaseService":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    def handle_error(
        self,
        error: Exception,
        operation: str,
        status_code: Optional[int] = None,
    ) -> ApiError:
        """Wrap and log a failed operation.

        Args:
            error: The exception that occurred
            operation: Name of the operation that failed
            status_code: HTTP status, when the server answered

        Returns:
            ApiError: The logged error
        """
        api_error = error if isinstance(error, ApiError) else ApiError(
            f"{self.__class__.__name__}.{operation} failed: {str(error)}",
            severity=ErrorSeverity.ERROR,
            cause=error,
            status_code=status_code,
        )
        logger.error(f"Service error: {api_error.to_dict()}")
        return api_error
