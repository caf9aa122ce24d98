"""Sprig application class.

Mutable during setup (route registration, action-set inclusion).
Frozen at runtime when ``handle()``, ``run()`` or ``__call__()`` is first
invoked.
"""

import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

import anyio
from kida.environment.protocols import Loader

from sprig._internal.asgi import Receive, Scope, Send
from sprig._internal.types import Action
from sprig.actions import ActionSet
from sprig.config import AppConfig
from sprig.dispatch import Dispatcher, Outcome
from sprig.errors import HTTPError
from sprig.http.forms import build_raw_input
from sprig.http.sender import send_outcome
from sprig.models.registry import ModelRegistry
from sprig.routing.route import Route
from sprig.routing.router import Router, RouteTable
from sprig.templating.environment import create_environment
from sprig.templating.layout import LayoutComposer

logger = logging.getLogger("sprig.server")


class App:
    """The sprig application.

    Mutable during setup (route registration, action sets). Frozen at
    runtime when the first request arrives.

    Thread safety:
        The setup phase is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the route table, even when several ASGI workers
        receive their first request at once. After freezing, the route
        table and template cache are only read.
    """

    __slots__ = (
        "_actions",
        "_custom_loader",
        "_dispatcher",
        "_freeze_lock",
        "_frozen",
        "_registry",
        # Compiled state (populated by _freeze)
        "_router",
        "config",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        registry: ModelRegistry | None = None,
        loader: Loader | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._actions: ActionSet = ActionSet()
        self._registry: ModelRegistry = registry if registry is not None else ModelRegistry()
        self._custom_loader: Loader | None = loader
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._router: Router | None = None
        self._dispatcher: Dispatcher | None = None

    # -- Route registration --

    def route(
        self,
        pattern: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Action], Action]:
        """Register an action via decorator.

        Args:
            pattern: URL pattern. Use ``:name`` for variable segments.
            methods: HTTP methods. Defaults to ``["GET"]``.
            name: Optional route name. Defaults to the function name.
        """
        self._check_not_frozen()
        return self._actions.route(pattern, methods=methods, name=name)

    def get(self, pattern: str, *, name: str | None = None) -> Callable[[Action], Action]:
        return self.route(pattern, methods=["GET"], name=name)

    def post(self, pattern: str, *, name: str | None = None) -> Callable[[Action], Action]:
        return self.route(pattern, methods=["POST"], name=name)

    def put(self, pattern: str, *, name: str | None = None) -> Callable[[Action], Action]:
        return self.route(pattern, methods=["PUT"], name=name)

    def patch(self, pattern: str, *, name: str | None = None) -> Callable[[Action], Action]:
        return self.route(pattern, methods=["PATCH"], name=name)

    def delete(self, pattern: str, *, name: str | None = None) -> Callable[[Action], Action]:
        return self.route(pattern, methods=["DELETE"], name=name)

    def add_route(self, method: str, pattern: str, action: Action, *, name: str | None = None) -> None:
        """Register an action explicitly (no decorator)."""
        self._check_not_frozen()
        self._actions.add(method, pattern, action, name=name)

    def include(self, actions: ActionSet, *, prefix: str = "") -> None:
        """Append every route of *actions*, in order, under *prefix*.

        Routes included earlier take precedence over later ones that
        match the same path.
        """
        self._check_not_frozen()
        self._actions.extend(actions.pending, prefix=prefix)

    # -- Services --

    @property
    def registry(self) -> ModelRegistry:
        """The model registry owned by this app."""
        return self._registry

    @property
    def routes(self) -> list[Route]:
        """Compiled routes in registration order. Freezes the app."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router.routes

    # -- Request handling --

    def handle(self, method: str, path: str, raw_input: Mapping[str, Any] | None = None) -> Outcome:
        """Dispatch one request synchronously.

        The seam between this app and any HTTP transport. Returns an
        ``Outcome`` (status, body); never raises for request-level errors.
        """
        self._ensure_frozen()
        assert self._dispatcher is not None
        return self._dispatcher.handle(method, path, raw_input)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly; HTTP scopes are parsed into
        ``(method, path, raw_input)`` and dispatched on a worker thread.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        self._ensure_frozen()

        body = await _read_body(receive)
        headers = {k.decode("latin-1").lower(): v.decode("latin-1") for k, v in scope.get("headers", ())}
        try:
            method, raw_input = build_raw_input(
                scope["method"],
                scope.get("query_string", b""),
                body,
                headers.get("content-type"),
                method_override=self.config.method_override,
            )
        except HTTPError as exc:
            logger.debug("%d %s %s: %s", exc.status, scope["method"], scope["path"], exc.detail)
            await send_outcome(Outcome(exc.status, exc.detail), send)
            return

        outcome = await anyio.to_thread.run_sync(self.handle, method, scope["path"], raw_input)
        await send_outcome(outcome, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup so configuration errors stop the
        server before it accepts traffic.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None, *, app_path: str | None = None) -> None:
        """Compile the app and serve it with pounce on one worker.

        Debug mode reloads on file changes in the working directory and
        ``config.reload_dirs``. *app_path* (``module:attribute``) lets
        pounce reimport the app on each reload.
        """
        from pounce.config import ServerConfig
        from pounce.server import Server

        self._ensure_frozen()
        server_config = ServerConfig(
            host=host or self.config.host,
            port=port or self.config.port,
            workers=1,
            reload=self.config.debug,
            reload_dirs=self.config.reload_dirs,
        )
        logger.info("Serving on http://%s:%d", server_config.host, server_config.port)
        Server(server_config, self, app_path=app_path).run()

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock. A
        ``ConfigurationError`` leaves the app unfrozen.
        """
        # 1. Compile route table
        table = RouteTable()
        for pending in self._actions.pending:
            table.register(pending.method, pending.pattern, pending.action, name=pending.name)
        table.compile()
        router = Router(table)

        # 2. Template environment
        env = create_environment(self.config, self._custom_loader)

        # 3. Dispatcher
        self._dispatcher = Dispatcher(
            router,
            LayoutComposer(env),
            default_layout=self.config.default_layout,
            debug=self.config.debug,
        )
        self._router = router
        self._frozen = True
        logger.debug("Compiled %d routes", len(table))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes and action sets before the first request."
            )
            raise RuntimeError(msg)


async def _read_body(receive: Receive) -> bytes:
    """Read the full ASGI request body."""
    chunks: list[bytes] = []
    while True:
        message = await receive()
        chunk = message.get("body", b"")
        if chunk:
            chunks.append(chunk)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)
