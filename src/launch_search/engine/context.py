"""Shared state handed to the query controller."""

from dataclasses import dataclass, field

from launch_search.catalog.base import CatalogProvider
from launch_search.config.schema import LaunchSearchConfig
from launch_search.config.store import SettingsStore
from launch_search.engine.activation import ActivationSink, SubprocessActivationSink
from launch_search.search.corpus import CorpusCache
from launch_search.search.filesystem import FileSystem, LocalFileSystem
from launch_search.search.generation import Generation
from launch_search.search.learning import LearningStore
from launch_search.search.synonyms import SynonymIndex
from launch_search.storage.base import MemoryBlobStore


@dataclass
class SearchContext:
    """Everything a query controller reads from or writes to.

    Each shared table is written only by its owning component: the corpus
    by the catalog-change handler, learning by selection recording, and
    synonyms by its settings listener.
    """

    settings: SettingsStore
    catalog: CatalogProvider
    corpus: CorpusCache = field(default_factory=CorpusCache)
    synonyms: SynonymIndex = field(default_factory=SynonymIndex)
    learning: LearningStore = field(default_factory=lambda: LearningStore(MemoryBlobStore()))
    generation: Generation = field(default_factory=Generation)
    filesystem: FileSystem = field(default_factory=LocalFileSystem)
    activation: ActivationSink = field(default_factory=SubprocessActivationSink)

    @property
    def config(self) -> LaunchSearchConfig:
        return self.settings.config
