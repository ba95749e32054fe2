'''
The plugin proper: the glue between the host application, the hidden-target cache and the toggle
engine.

The host calls process_fragment() for each rendered piece of a document. This marks the `.base`
embeds the document hides and gives every embed a lock button. Clicking a button corresponds to a
ToggleRequest, which the host hands back to toggle(). That rewrites the document's text, updates
the clicked embed straight away, and then asks the host to re-render, so that other embeds of the
same target catch up.
'''

from __future__ import annotations
from . import embeds
from .cache import HiddenTargetsCache
from .host import Document, Host
from .progress import Progress
from .references import DOCUMENT_EXTENSION, HIDE_FLAG, SHOW_FLAG
from .toggle import ToggleResult, toggle_flag

import lxml.html

from dataclasses import dataclass
from typing import List, Optional

NAME = 'bases-lock'


@dataclass(frozen = True)
class RenderContext:
    source_path: str
    doc_id: Optional[str] = None

    @property
    def key(self) -> str:
        return self.doc_id or self.source_path


@dataclass(frozen = True)
class ToggleRequest:
    source_path: str
    doc_id: Optional[str]
    target: str
    flag: str

    @property
    def key(self) -> str:
        return self.doc_id or self.source_path


class BasesLockPlugin:
    def __init__(self, host: Host, progress: Progress = None, cache: HiddenTargetsCache = None):
        self.host = host
        self.progress = progress or Progress()
        self.cache = cache or HiddenTargetsCache(self.progress)


    def load(self):
        self.progress.progress(NAME, msg = 'Plugin loaded')


    def unload(self):
        self.cache.clear()
        self.progress.progress(NAME, msg = 'Plugin unloaded')


    def _document(self, path: str) -> Document | None:
        document = self.host.resolve(path)
        if document is None or document.extension != DOCUMENT_EXTENSION:
            return None
        return document


    def process_fragment(self,
                         element: lxml.html.HtmlElement,
                         context: RenderContext) -> List[ToggleRequest]:
        '''
        Marks and equips every `.base` embed within 'element', and returns the toggle request
        attached to each one's button.
        '''
        def fetch_text():
            document = self._document(context.source_path)
            return None if document is None else self.host.cached_read(document)

        try:
            hidden_targets = self.cache.get_hidden_targets(
                context.key, context.source_path, fetch_text)
        except OSError as e:
            self.progress.error(NAME,
                                msg = f'Cannot read "{context.source_path}"',
                                exception = e,
                                show_traceback = False)
            return []

        requests = []
        for embed, target in embeds.find_embeds(element):
            hidden = target in hidden_targets
            embeds.attach_toggle(embed, target)
            embeds.show_state(embed, hidden)
            requests.append(self.request_for(embed, context))

        return requests


    def request_for(self, embed: lxml.html.HtmlElement, context: RenderContext) -> ToggleRequest:
        '''Describes the toggle that clicking the embed's button asks for.'''
        button = embeds.toggle_button(embed)
        if button is not None:
            target = button.get('data-target')
            flag = button.get('data-flag')
        else:
            target = embeds.embed_source(embed).strip()
            flag = HIDE_FLAG if embeds.HIDDEN_CLASS in embed.classes else SHOW_FLAG

        return ToggleRequest(source_path = context.source_path,
                             doc_id = context.doc_id,
                             target = target,
                             flag = flag)


    def toggle(self,
               request: ToggleRequest,
               embed: lxml.html.HtmlElement = None) -> ToggleResult | None:
        '''
        Flips the flag of the first reference to 'request.target' in the request's document.

        Returns None (having written nothing) if the document doesn't exist, isn't markdown,
        can't be read or written, or doesn't refer to the target.
        '''
        document = self._document(request.source_path)
        if document is None:
            return None

        try:
            text = self.host.read(document)
        except OSError as e:
            self.progress.error(NAME,
                                msg = f'Cannot read "{request.source_path}"',
                                exception = e,
                                show_traceback = False)
            return None

        result = toggle_flag(text, request.target)
        if result is None:
            self.progress.progress(
                NAME, msg = f'No reference to "{request.target}" in "{request.source_path}"')
            return None

        try:
            self.host.modify(document, result.text)
        except OSError as e:
            self.progress.error(NAME,
                                msg = f'Cannot write "{request.source_path}"',
                                exception = e,
                                show_traceback = False)
            return None

        self.cache.refresh(request.key, request.source_path, result.text)

        if embed is not None:
            embeds.show_state(embed, result.hidden)

        self._rerender(document)
        return result


    def _rerender(self, document: Document):
        active = self.host.active_document()
        if active is None or active.path != document.path:
            return

        try:
            self.host.rerender(document)
        except Exception as e:
            self.progress.warning(NAME, msg = 'Failed to force preview rerender', exception = e)
