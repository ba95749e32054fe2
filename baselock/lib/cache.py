'''
Remembers each rendered document's hidden-target set, so that rendering a document in several
fragments does not re-read and re-scan its text for every fragment.
'''

from __future__ import annotations
from .extractor import extract_hidden_targets
from .progress import Progress

from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Optional

NAME = 'cache'


@dataclass(frozen = True)
class CacheEntry:
    key: str
    source_path: str
    hidden_targets: FrozenSet[str] = field(default_factory = frozenset)


class HiddenTargetsCache:
    '''
    Entries are keyed by the render context's document id (or the source path if there isn't
    one). The host may reuse an id for a different document, so an entry only counts as a hit if
    its source path also matches.
    '''

    def __init__(self, progress: Progress = None):
        self._entries: Dict[str, CacheEntry] = {}
        self._progress = progress or Progress()


    def get_hidden_targets(self,
                           context_key: str,
                           source_path: str,
                           fetch_text: Callable[[], Optional[str]]) -> FrozenSet[str]:
        '''
        Returns the hidden targets of 'source_path', calling 'fetch_text' only on a cache miss.
        'fetch_text' returns None if the path is not a markdown document, in which case the
        (empty) result is remembered without any text being read.
        '''
        entry = self._entries.get(context_key)
        if entry is not None and entry.source_path == source_path:
            self._progress.cache_hit(NAME, resource = source_path)
            return entry.hidden_targets

        text = fetch_text()
        hidden_targets = frozenset() if text is None else frozenset(extract_hidden_targets(text))
        self._entries[context_key] = CacheEntry(context_key, source_path, hidden_targets)
        return hidden_targets


    def refresh(self, context_key: str, source_path: str, text: str) -> FrozenSet[str]:
        '''Replaces the entry for 'context_key' with the hidden targets of known-current text.'''
        hidden_targets = frozenset(extract_hidden_targets(text))
        self._entries[context_key] = CacheEntry(context_key, source_path, hidden_targets)
        return hidden_targets


    def clear(self):
        self._entries.clear()


    def __len__(self):
        return len(self._entries)


    def __contains__(self, context_key):
        return context_key in self._entries
