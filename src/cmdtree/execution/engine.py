"""
Handler registry and runner on top of dispatch.

The engine owns the mapping of leaf command paths to handlers. Running an
argument vector dispatches it, validates the bound values into the leaf's
parameter-bundle model and calls the registered handler with that instance.
"""

import logging
from typing import Any, Callable

from cmdtree.core.tree import ResolvedTree
from cmdtree.dynamic import BundleModel, bind_bundle, bundle_models
from cmdtree.exceptions import DispatchError, HandlerBindingError, HandlerNotFoundError
from cmdtree.execution.dispatch import Dispatcher
from cmdtree.execution.help import render_help
from cmdtree.execution.results import DispatchFailure, HelpRequest
from cmdtree.structure.contract import HELP_HANDLER, build_contract

logger = logging.getLogger(__name__)

Handler = Callable[[BundleModel], Any]
HelpHandler = Callable[[HelpRequest], Any]


class Engine:
    """Registry of command handlers for one resolved tree.

    Responsibilities:
      - Keep a mutable mapping of leaf path -> handler.
      - Bind handler objects whose method names follow the contract's handler names.
      - Dispatch argument vectors and invoke the matching handler.

    Notes:
      - Without a registered help handler, help requests return the rendered help text.
    """

    def __init__(self, tree: ResolvedTree):
        self.tree = tree
        self.contract = build_contract(tree)
        self.models = bundle_models(self.contract)
        self._dispatcher = Dispatcher(tree)
        self._handlers: dict[str, Handler] = {}
        self._help_handler: HelpHandler = self.default_help

    def register(self, path: str, handler: Handler) -> None:
        """Register a handler for a leaf command.

        Params:
            path: Full path of a leaf command.
            handler: Callable receiving the leaf's bundle instance.

        Raises:
            KeyError: If the path does not name a leaf command.
        """
        if path not in self.models:
            raise KeyError(f"Command {path} is not a leaf command. Available: {self.list_commands()}")
        self._handlers[path] = handler

    def register_help(self, handler: HelpHandler) -> None:
        """Replace the help handler."""
        self._help_handler = handler

    def bind(self, obj: object) -> None:
        """Register every handler method of `obj` by its contract handler name.

        Params:
            obj: Object with one method per leaf handler name, plus `help`.

        Raises:
            HandlerBindingError: If any expected method is missing.
        """
        missing = [
            name for name in self.contract.handler_names if not callable(getattr(obj, name, None))
        ]
        if missing:
            raise HandlerBindingError(missing)
        for leaf in self.contract.leaves:
            self._handlers[leaf.path] = getattr(obj, leaf.handler_name)
        self._help_handler = getattr(obj, HELP_HANDLER)
        logger.debug("bound %d handlers from %s", len(self.contract.leaves), type(obj).__name__)

    def list_commands(self) -> list[str]:
        """List leaf command paths in path order."""
        return list(self.models)

    def default_help(self, request: HelpRequest) -> str:
        return render_help(self.tree, request)

    def run(self, argv: list[str]) -> Any:
        """Dispatch `argv` and call the resulting handler.

        Params:
            argv: Raw arguments, without the program name.

        Returns:
            Whatever the called handler returns.

        Raises:
            DispatchError: If dispatch fails.
            HandlerNotFoundError: If the dispatched leaf has no handler.
        """
        result = self._dispatcher.dispatch(argv)
        if isinstance(result, DispatchFailure):
            raise DispatchError(result)
        if isinstance(result, HelpRequest):
            return self._help_handler(result)

        handler = self._handlers.get(result.path)
        if handler is None:
            raise HandlerNotFoundError(result.path)
        bundle = bind_bundle(self.models[result.path], result.bundle.as_dict())
        logger.debug("running %s", result.path)
        return handler(bundle)
