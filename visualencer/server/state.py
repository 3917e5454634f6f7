"""
PreviewState — the node catalog and compiler options shared by every request.

Built once at import time. Registration happens here, before the app serves
its first request; the routes only read.
"""
from __future__ import annotations

import logging

from visualencer.compiler import GraphCompiler
from visualencer.config import CompilerOptions, load_options
from visualencer.noderegistry.NodeRegistry import NodeTypeRegistry
from visualencer.nodes import default_registry


logger = logging.getLogger(__name__)


class PreviewState:
    """Holds the registry and the default compile options for the preview service."""

    def __init__(self, registry: NodeTypeRegistry = None, options: CompilerOptions = None) -> None:
        self.registry: NodeTypeRegistry = registry if registry is not None else default_registry()
        self.options: CompilerOptions = options if options is not None else load_options()
        logger.info(f"Preview catalog ready: {len(self.registry)} node types")

    def compiler(self, options: CompilerOptions = None) -> GraphCompiler:
        return GraphCompiler(self.registry, options or self.options)


preview_state = PreviewState()
