"""Control command dispatcher.

Decodes a ControlRequest, applies the registry mutation it names and builds
the ControlResponse. The set of actions is closed; anything else is reported
back as an error.
"""

from collections.abc import Callable

import structlog

from rssdesk.exceptions import (
    DispatchError,
    MissingArgumentError,
    TooManyArgumentsError,
    UnknownActionError,
)
from rssdesk.models.control import ControlRequest, ControlResponse
from rssdesk.registry import SourceRegistry

logger = structlog.get_logger()

ADD_URL_PARAMS = ["name", "url"]


class CommandDispatcher:
    """Synchronous dispatcher over the source registry.

    Reason: A request is fully handled before dispatch returns, so two
    commands never interleave their registry mutations.
    """

    def __init__(self, registry: SourceRegistry):
        self._registry = registry
        self._handlers: dict[str, Callable[[list[str]], ControlResponse]] = {
            "add_url": self._add_url,
        }

    @property
    def actions(self) -> list[str]:
        return list(self._handlers)

    def dispatch(self, request: ControlRequest) -> ControlResponse:
        """Execute one control request.

        Never raises for a bad request; the failure is returned in
        ``ControlResponse.error``.
        """
        log = logger.bind(action=request.action, params=len(request.params))
        try:
            handler = self._handlers.get(request.action)
            if handler is None:
                raise UnknownActionError(request.action)
            response = handler(request.params)
        except DispatchError as e:
            log.warning("Command rejected", error=str(e), error_type=type(e).__name__)
            return ControlResponse.failed(str(e))

        log.info("Command dispatched")
        return response

    def _add_url(self, params: list[str]) -> ControlResponse:
        self._check_arity("add_url", params, ADD_URL_PARAMS)
        name, url = params
        self._registry.add(name, url)
        return ControlResponse.ok("")

    def _check_arity(self, action: str, params: list[str], expected: list[str]) -> None:
        if len(params) < len(expected):
            raise MissingArgumentError(action, expected, len(params))
        if len(params) > len(expected):
            raise TooManyArgumentsError(action, expected, len(params))
