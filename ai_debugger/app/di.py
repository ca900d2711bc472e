from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx
from lsprotocol.types import SHUTDOWN
from pygls.lsp.server import LanguageServer

from .config import AppConfig
from .handlers.commands import register_commands
from .handlers.documents import register_document_handlers
from ..modules.debugger.infrastructure.http_client import HttpFixClient
from ..modules.debugger.infrastructure.lsp_surface import LspEditingSurface, LspMarkerPublisher
from ..modules.debugger.services.active_document import ActiveDocumentTracker
from ..modules.debugger.services.bridge import InferenceBridge
from ..modules.debugger.services.markers import MarkerCollection
from ..modules.debugger.services.scheduler import ScanScheduler

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    config: AppConfig
    server: LanguageServer
    fix_client: HttpFixClient
    markers: MarkerCollection
    tracker: ActiveDocumentTracker
    bridge: InferenceBridge

    @classmethod
    def build(
        cls,
        config: AppConfig,
        server: LanguageServer | None = None,
        http: httpx.AsyncClient | None = None,
    ) -> "AppContainer":
        server = server or LanguageServer(config.server_name, config.server_version)
        http = http or httpx.AsyncClient(timeout=config.request_timeout)
        fix_client = HttpFixClient(http, endpoint=config.endpoint_url)
        markers = MarkerCollection(LspMarkerPublisher(server))
        tracker = ActiveDocumentTracker()
        bridge = InferenceBridge(
            fix_client,
            LspEditingSurface(server),
            markers,
            scheduler=ScanScheduler(),
            scan_on_change=config.scan_on_change,
        )
        return cls(
            config=config,
            server=server,
            fix_client=fix_client,
            markers=markers,
            tracker=tracker,
            bridge=bridge,
        )

    def create_server(self) -> LanguageServer:
        register_commands(self.server, self.bridge, self.tracker)
        register_document_handlers(self.server, self.bridge, self.tracker)

        @self.server.feature(SHUTDOWN)
        async def on_shutdown(ls: LanguageServer, params: object = None) -> None:
            await self.aclose()

        return self.server

    async def aclose(self) -> None:
        logger.info("Shutting down AI Debugger bridge")
        await self.bridge.aclose()
        self.markers.clear()
        await self.fix_client.aclose()
