'''
A host backed by a plain directory of markdown files (a 'vault'), rendering documents with Python
Markdown.

Paths are '/'-separated and relative to the vault root, whatever the platform.
'''

from __future__ import annotations
from .host import Document, Host
from baselock.ext.embeds import EmbedsExtension

import markdown

import os
from typing import Dict, Optional, Tuple


class VaultHost(Host):
    def __init__(self, root: str):
        self._root = root
        self._read_cache: Dict[str, Tuple[int, str]] = {}
        self._views: Dict[str, str] = {}
        self._active: Optional[Tuple[Document, object, Optional[str]]] = None

    def _full_path(self, path: str) -> str:
        return os.path.join(self._root, *path.split('/'))


    def resolve(self, path: str) -> Document | None:
        if not path or not os.path.isfile(self._full_path(path)):
            return None
        return Document(path, os.path.splitext(path)[1][1:])


    def cached_read(self, document: Document) -> str:
        mtime = os.stat(self._full_path(document.path)).st_mtime_ns
        entry = self._read_cache.get(document.path)
        if entry is not None and entry[0] == mtime:
            return entry[1]

        text = self.read(document)
        self._read_cache[document.path] = (mtime, text)
        return text


    def read(self, document: Document) -> str:
        # newline = '' preserves the file's own line endings when the text is written back.
        with open(self._full_path(document.path), encoding = 'utf-8', newline = '') as reader:
            return reader.read()


    def modify(self, document: Document, text: str):
        full_path = self._full_path(document.path)
        with open(full_path, 'w', encoding = 'utf-8', newline = '') as writer:
            writer.write(text)
        self._read_cache[document.path] = (os.stat(full_path).st_mtime_ns, text)


    def render(self, path: str, plugin = None, doc_id: str = None) -> str:
        '''
        Converts the document at 'path' to HTML. If a plugin is given, it receives the result as a
        rendered fragment.
        '''
        document = self.resolve(path)
        if document is None:
            raise FileNotFoundError(path)

        extension = EmbedsExtension(plugin = plugin or '',
                                    source_path = path,
                                    doc_id = doc_id or '')
        return markdown.markdown(self.cached_read(document), extensions = [extension])


    def open(self, path: str, plugin = None, doc_id: str = None) -> str:
        '''Renders the document at 'path' and makes it the active one.'''
        html = self.render(path, plugin, doc_id)
        self._active = (self.resolve(path), plugin, doc_id)
        self._views[path] = html
        return html


    def html(self, path: str) -> str | None:
        '''Returns the most recent rendering of an opened document.'''
        return self._views.get(path)


    def active_document(self) -> Document | None:
        return self._active[0] if self._active else None


    def rerender(self, document: Document):
        if self._active is None or self._active[0].path != document.path:
            return
        _, plugin, doc_id = self._active
        self._views[document.path] = self.render(document.path, plugin, doc_id)
