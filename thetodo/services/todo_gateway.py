"""
HTTP gateway to the remote todo store.

Stateless wrapper around ``httpx.AsyncClient`` that encodes and decodes the
wire protocol for the four remote operations and attaches the installation
identity to every call. Failures are returned as ``Err`` values rather than
raised; nothing is retried.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from thetodo.codec import decode_todo, decode_todo_list, encode_done_update, encode_new_todo
from thetodo.errors import ParseError, ServerError, TransportError
from thetodo.logging_config import get_logger
from thetodo.models import TodoRecord
from thetodo.services.identity import IdentityProvider
from thetodo.services.result import Err, Ok, Result

logger = get_logger(__name__)

USER_ID_HEADER = "x-user-id"
COLLECTION_PATH = "/todos"


class RemoteTodoGateway:
    """
    Client for the ``/todos`` HTTP API.

    Operations:
    - list_todos(): GET /todos
    - create(): POST /todos
    - update(): PUT /todos/{id}
    - delete(): DELETE /todos/{id}
    """

    def __init__(
        self,
        identity: IdentityProvider,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the gateway.

        Args:
            identity: Provider of the identity sent in the x-user-id header
            base_url: Server root, e.g. http://127.0.0.1:3000
            timeout: Request timeout in seconds (ignored when client is given)
            client: Optional preconfigured client; the caller keeps ownership
        """
        self.identity = identity
        self.base_url = base_url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> "RemoteTodoGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this gateway created it."""
        if self._owns_client:
            await self._client.aclose()

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    async def list_todos(self) -> Result[List[TodoRecord]]:
        """
        Fetch all todos visible to this installation.

        Returns:
            Ok(records in server order) or Err(ServerError | TransportError | ParseError)
        """
        response = await self._send("GET", COLLECTION_PATH)
        if isinstance(response, Err):
            return response
        if response.status_code != 200:
            return self._server_error("list", response)
        return self._decode(response, decode_todo_list)

    async def create(self, title: str) -> Result[TodoRecord]:
        """
        Create a todo; the server assigns its identifier.

        Args:
            title: Title of the new todo

        Returns:
            Ok(server-confirmed record) or Err
        """
        response = await self._send("POST", COLLECTION_PATH, json=encode_new_todo(title))
        if isinstance(response, Err):
            return response
        if response.status_code not in (200, 201):
            return self._server_error("create", response)
        return self._decode(response, decode_todo)

    async def update(self, todo_id: str, done: bool) -> Result[None]:
        """
        Set the completion flag of a todo.

        Args:
            todo_id: Server-assigned identifier
            done: New completion state

        Returns:
            Ok(None) or Err
        """
        response = await self._send("PUT", self._item_path(todo_id), json=encode_done_update(done))
        if isinstance(response, Err):
            return response
        if response.status_code != 200:
            return self._server_error("update", response)
        return Ok(None)

    async def delete(self, todo_id: str) -> Result[None]:
        """
        Delete a todo.

        Args:
            todo_id: Server-assigned identifier

        Returns:
            Ok(None) or Err
        """
        response = await self._send("DELETE", self._item_path(todo_id))
        if isinstance(response, Err):
            return response
        if response.status_code != 200:
            return self._server_error("delete", response)
        return Ok(None)

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _item_path(todo_id: str) -> str:
        return f"{COLLECTION_PATH}/{quote(todo_id, safe='')}"

    async def _headers(self) -> Dict[str, str]:
        user_id = await self.identity.get_or_create_identity()
        return {
            USER_ID_HEADER: user_id,
            "Content-Type": "application/json",
        }

    async def _send(self, method: str, path: str, json: Any = None):
        """
        Send a request, returning the response or Err(TransportError).

        A request httpx cannot build (invalid URL, header value that is not
        ASCII) counts as a transport failure too.
        """
        headers = await self._headers()
        try:
            response = await self._client.request(method, path, headers=headers, json=json)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.warning(f"{method} {path} failed: {e!r}")
            return Err(TransportError(e))
        logger.debug(f"{method} {path} -> {response.status_code}")
        return response

    @staticmethod
    def _server_error(operation: str, response: httpx.Response) -> Err:
        logger.warning(
            f"Remote {operation} failed: {response.request.method} "
            f"{response.request.url.path} -> {response.status_code}"
        )
        return Err(ServerError(response.status_code))

    @staticmethod
    def _decode(response: httpx.Response, decoder) -> Result[Any]:
        try:
            return Ok(decoder(response.json()))
        except ParseError as e:
            logger.warning(f"Malformed todo in response: {e}")
            return Err(e)
        except ValueError as e:
            logger.warning(f"Response body is not JSON: {e}")
            return Err(ParseError(f"Response is not valid JSON: {e}"))
