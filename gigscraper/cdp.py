"""A small DevTools protocol client for driving an already running Chrome."""

from __future__ import annotations

import itertools
import json
import time
from collections.abc import Callable
from typing import Any, TypeVar

import websocket

DEFAULT_TIMEOUT = 20.0
POLL_INTERVAL = 0.1

_INNER_TEXT_FUNCTION = "function() { return this.innerText; }"

_T = TypeVar("_T")


class CdpError(Exception):
    """The browser rejected a command or did not reach the expected state."""


class CdpConnection:
    """A websocket connection that speaks the DevTools protocol."""

    def __init__(self, socket: Any) -> None:
        self._socket = socket
        self._ids = itertools.count(1)

    def call(
        self,
        method: str,
        params: dict[str, Any] | None = None,
        session_id: str | None = None,
    ) -> dict[str, Any]:
        """Send a command and return its result, skipping events on the way."""
        message_id = next(self._ids)
        message: dict[str, Any] = {"id": message_id, "method": method, "params": params or {}}
        if session_id is not None:
            message["sessionId"] = session_id
        try:
            self._socket.send(json.dumps(message))
            while True:
                reply = json.loads(self._socket.recv())
                if reply.get("id") == message_id:
                    break
        except (websocket.WebSocketException, OSError, ValueError) as error:
            raise CdpError(f"{method}: {error}") from error
        if "error" in reply:
            error = reply["error"]
            detail = error.get("message", error) if isinstance(error, dict) else error
            raise CdpError(f"{method}: {detail}")
        return reply.get("result", {})

    def close(self) -> None:
        """Close the underlying websocket."""
        self._socket.close()

    def __enter__(self) -> CdpConnection:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class ChromeElement:
    """A DOM element of a tab, held by its remote object id."""

    def __init__(self, tab: ChromeTab, object_id: str) -> None:
        self._tab = tab
        self.object_id = object_id

    def _command(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._tab._command(method, {"objectId": self.object_id, **(params or {})})

    def get_content(self) -> str:
        """The element's outer HTML."""
        return self._command("DOM.getOuterHTML")["outerHTML"]

    def get_inner_text(self) -> str:
        """The element's rendered text."""
        result = self._command(
            "Runtime.callFunctionOn",
            {"functionDeclaration": _INNER_TEXT_FUNCTION, "returnByValue": True},
        )
        if "exceptionDetails" in result:
            details = result["exceptionDetails"]
            raise CdpError(f"reading inner text failed: {details.get('text', details)}")
        value = result.get("result", {}).get("value")
        return "" if value is None else str(value)

    def get_attribute_value(self, name: str) -> str | None:
        """The value of attribute ``name``, or None when it is absent."""
        node = self._command("DOM.describeNode")["node"]
        attributes = node.get("attributes", [])
        return dict(zip(attributes[0::2], attributes[1::2])).get(name)

    def scroll_into_view(self) -> ChromeElement:
        """Scroll the page until the element is visible."""
        self._command("DOM.scrollIntoViewIfNeeded")
        return self

    def _midpoint(self) -> tuple[float, float]:
        self.scroll_into_view()
        quad = self._command("DOM.getBoxModel")["model"]["content"]
        xs, ys = quad[0::2], quad[1::2]
        return sum(xs) / len(xs), sum(ys) / len(ys)

    def move_mouse_over(self) -> ChromeElement:
        """Move the mouse pointer to the element's centre."""
        x, y = self._midpoint()
        self._tab._mouse_event("mouseMoved", x, y)
        return self

    def click(self) -> ChromeElement:
        """Click the element's centre with the left mouse button."""
        x, y = self._midpoint()
        self._tab._mouse_event("mouseMoved", x, y)
        self._tab._mouse_event("mousePressed", x, y, button="left", clickCount=1)
        self._tab._mouse_event("mouseReleased", x, y, button="left", clickCount=1)
        return self


class ChromeTab:
    """A page target of the browser."""

    def __init__(
        self,
        connection: CdpConnection,
        target_id: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        poll_interval: float = POLL_INTERVAL,
    ) -> None:
        self._connection = connection
        self.target_id = target_id
        self.timeout = timeout
        self.poll_interval = poll_interval
        self._session_id: str | None = None

    def _session(self) -> str:
        if self._session_id is None:
            result = self._connection.call(
                "Target.attachToTarget", {"targetId": self.target_id, "flatten": True}
            )
            self._session_id = result["sessionId"]
        return self._session_id

    def _command(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._connection.call(method, params, self._session())

    def _mouse_event(self, event_type: str, x: float, y: float, **extra: Any) -> None:
        self._command("Input.dispatchMouseEvent", {"type": event_type, "x": x, "y": y, **extra})

    def _info(self) -> dict[str, Any]:
        return self._connection.call("Target.getTargetInfo", {"targetId": self.target_id})[
            "targetInfo"
        ]

    def get_title(self) -> str:
        """The title of the tab's current page."""
        return self._info().get("title", "")

    def get_url(self) -> str:
        """The URL of the tab's current page."""
        return self._info().get("url", "")

    def _root(self) -> int:
        return self._command("DOM.getDocument", {"depth": 0})["root"]["nodeId"]

    def _resolve(self, node_id: int) -> ChromeElement:
        remote = self._command("DOM.resolveNode", {"nodeId": node_id})["object"]
        return ChromeElement(self, remote["objectId"])

    def _query(self, selector: str) -> ChromeElement | None:
        node_id = self._command(
            "DOM.querySelector", {"nodeId": self._root(), "selector": selector}
        )["nodeId"]
        return self._resolve(node_id) if node_id else None

    def find_element(self, selector: str) -> ChromeElement:
        """The first element matching ``selector``."""
        element = self._query(selector)
        if element is None:
            raise CdpError("No element found")
        return element

    def find_elements(self, selector: str) -> list[ChromeElement]:
        """Every element matching ``selector``, in document order."""
        node_ids = self._command(
            "DOM.querySelectorAll", {"nodeId": self._root(), "selector": selector}
        )["nodeIds"]
        return [self._resolve(node_id) for node_id in node_ids]

    def _poll(self, probe: Callable[[], _T | None], timeout: float, description: str) -> _T:
        deadline = time.monotonic() + timeout
        last_error: CdpError | None = None
        while True:
            try:
                value = probe()
            except CdpError as error:
                last_error, value = error, None
            if value is not None:
                return value
            if time.monotonic() >= deadline:
                detail = f": {last_error}" if last_error is not None else ""
                raise CdpError(f"Timed out after {timeout}s waiting for {description}{detail}")
            time.sleep(self.poll_interval)

    def wait_for_element(self, selector: str) -> ChromeElement:
        """Wait with the tab's default timeout for an element matching ``selector``."""
        return self.wait_for_element_with_custom_timeout(selector, self.timeout)

    def wait_for_element_with_custom_timeout(
        self, selector: str, timeout: float
    ) -> ChromeElement:
        """Wait up to ``timeout`` seconds for an element matching ``selector``."""
        return self._poll(lambda: self._query(selector), timeout, "element")

    def wait_until_navigated(self) -> None:
        """Block until the current document has finished loading."""

        def loaded() -> bool | None:
            result = self._command(
                "Runtime.evaluate", {"expression": "document.readyState", "returnByValue": True}
            )
            return True if result.get("result", {}).get("value") == "complete" else None

        self._poll(loaded, self.timeout, "navigation")

    def navigate_to(self, url: str) -> None:
        """Point the tab at ``url``."""
        result = self._command("Page.navigate", {"url": url})
        if result.get("errorText"):
            raise CdpError(result["errorText"])

    def close(self) -> None:
        """Close the tab."""
        self._connection.call("Target.closeTarget", {"targetId": self.target_id})

    def __repr__(self) -> str:
        return f"ChromeTab(target_id={self.target_id!r})"


class Browser:
    """A running browser reached through its DevTools websocket."""

    def __init__(self, connection: CdpConnection) -> None:
        self._connection = connection

    @staticmethod
    def connect(ws_url: str) -> Browser:
        """Connect to the browser's DevTools websocket at ``ws_url``."""
        try:
            socket = websocket.create_connection(ws_url)
        except (websocket.WebSocketException, OSError) as error:
            raise CdpError(f"Cannot connect to '{ws_url}': {error}") from error
        return Browser(CdpConnection(socket))

    def new_tab(self) -> ChromeTab:
        """Open a blank tab."""
        result = self._connection.call("Target.createTarget", {"url": "about:blank"})
        return ChromeTab(self._connection, result["targetId"])

    def get_tabs(self) -> list[ChromeTab]:
        """The browser's open page tabs."""
        infos = self._connection.call("Target.getTargets")["targetInfos"]
        return [
            ChromeTab(self._connection, info["targetId"])
            for info in infos
            if info.get("type") == "page"
        ]

    def close(self) -> None:
        """Close the connection; the browser keeps running."""
        self._connection.close()

    def __enter__(self) -> Browser:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()