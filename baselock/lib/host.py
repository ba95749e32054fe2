'''
The host application: whatever stores documents, renders them, and shows them to the user.
'''

from __future__ import annotations

import abc
from dataclasses import dataclass


@dataclass(frozen = True)
class Document:
    path: str
    extension: str


class Host(abc.ABC):
    '''
    Implementations signal I/O failure by raising OSError. The plugin never retries; it reports
    the failure and gives up on the current operation.
    '''

    @abc.abstractmethod
    def resolve(self, path: str) -> Document | None:
        '''Returns the document stored at 'path', or None if there isn't one.'''
        raise NotImplementedError

    @abc.abstractmethod
    def cached_read(self, document: Document) -> str:
        '''Returns the document's text, possibly from the host's own (possibly stale) cache.'''
        raise NotImplementedError

    @abc.abstractmethod
    def read(self, document: Document) -> str:
        raise NotImplementedError

    @abc.abstractmethod
    def modify(self, document: Document, text: str):
        raise NotImplementedError

    def active_document(self) -> Document | None:
        return None

    def rerender(self, document: Document):
        '''Asks the host to render 'document' again. Hosts without a live view do nothing.'''
