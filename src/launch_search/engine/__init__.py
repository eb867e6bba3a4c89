"""Query engine: controller, deferred loading and activation."""

from launch_search.engine.activation import ActivationSink, SubprocessActivationSink
from launch_search.engine.context import SearchContext
from launch_search.engine.controller import DisplayRow, OverviewModel, QueryController, ViewState
from launch_search.engine.deferred import DeferredResourceLoader
from launch_search.search.generation import Generation

__all__ = [
    "ActivationSink",
    "DeferredResourceLoader",
    "DisplayRow",
    "Generation",
    "OverviewModel",
    "QueryController",
    "SearchContext",
    "SubprocessActivationSink",
    "ViewState",
]
